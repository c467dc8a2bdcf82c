from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)


def build_engine(url: str, echo: bool = False):
    """Crea el engine async; el pool solo se dimensiona en PostgreSQL."""
    options = {"pool_pre_ping": True, "echo": echo}
    if url.startswith("postgresql"):
        options.update(pool_size=10, max_overflow=20)
    return create_async_engine(url, **options)


# Async engine for application use
async_engine = build_engine(settings.async_database_url, echo=settings.DEBUG)

# Async session for application
AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

Base = declarative_base()


def load_models():
    """Importa los modelos para registrarlos en Base.metadata."""
    import app.modules.clients.models  # noqa: F401
    import app.modules.projects.models  # noqa: F401
    import app.modules.purchases.models  # noqa: F401
    import app.modules.finance.models  # noqa: F401
    import app.modules.invoices.models  # noqa: F401
    import app.modules.workers.models  # noqa: F401
    import app.modules.suppliers.models  # noqa: F401


async def create_tables(engine=async_engine):
    """Crea las tablas registradas (solo desarrollo y tests, sin migraciones)."""
    load_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")
