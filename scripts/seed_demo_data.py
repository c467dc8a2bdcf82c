"""
Seed script: Populate the database with a realistic construction company demo.

What it creates:
- Clients (public works, developers, private owners) with outstanding debt.
- Projects in every status with budget, expenses and progress.
- Suppliers of materials and workers assigned to the projects.
- Purchases of materials (cement, rebar, sand) in ordered/shipping/received.
- Finance transactions (income/expense) over the last months.
- Invoices: proformas and finals built with the same InvoiceBuilder the API uses.

Run inside the API container to use 'postgres' host and project PYTHONPATH:
    docker compose exec api python scripts/seed_demo_data.py --invoices 30

Print one of the seeded invoices to an HTML file:
    python scripts/seed_demo_data.py --invoices 5 --print-to /tmp/invoice.html

Note: This is intended for development environments only.
"""

# Add project root (/code) to sys.path so `app.*` imports work even if CWD changes
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
import asyncio
import random
from datetime import date, timedelta
from decimal import Decimal

from app.database.database import AsyncSessionLocal, async_engine, create_tables
from app.database.row_store import SqlAlchemyRowStore
from app.modules.clients.schemas import ClientCreate
from app.modules.clients.service import ClientService
from app.modules.finance.schemas import PaymentMethod, TransactionCreate, TransactionType
from app.modules.finance.service import FinanceService
from app.modules.invoices.builder import InvoiceBuilder
from app.modules.invoices.renderer import FilePrintSurface, InvoiceDocumentRenderer
from app.modules.invoices.schemas import InvoiceType, Unit
from app.modules.projects.schemas import ProjectCreate, ProjectStatus
from app.modules.projects.service import ProjectService
from app.modules.purchases.schemas import PurchaseCreate, PurchaseStatus
from app.modules.purchases.service import PurchaseService
from app.modules.suppliers.schemas import SupplierCreate
from app.modules.suppliers.service import SupplierService
from app.modules.workers.schemas import WorkerCreate
from app.modules.workers.service import WorkerService


CLIENTS = [
    ("Direction des Travaux Publics de Sétif", "Cité administrative, Sétif", "036 84 10 10"),
    ("Promotion Immobilière El Nour", "Boulevard de l'ALN, Bordj Bou Arréridj", "035 68 22 41"),
    ("APC El Eulma", "Place du 1er Novembre, El Eulma", "036 87 55 12"),
    ("Sarl Batiplus", "Zone d'activités, Ain Arnat", "036 93 70 08"),
    ("M. Karim Bensaïd", "Lotissement 250, Sétif", "0550 12 34 56"),
]

PROJECTS = [
    ("Résidence 120 logements LPP", ProjectStatus.ACTIVE),
    ("Réfection CW 117", ProjectStatus.DELAYED),
    ("Groupe scolaire Hai Yasmine", ProjectStatus.ACTIVE),
    ("Villa R+2 Bensaïd", ProjectStatus.COMPLETED),
    ("Hangar de stockage Batiplus", ProjectStatus.PENDING),
]

# (descripción, unidad, rango de cantidad, precio unitario)
CATALOG = [
    ("Béton dosé à 350 kg/m3", Unit.CUBIC_METER, (5, 60), Decimal("5000")),
    ("Terrassement en grande masse", Unit.CUBIC_METER, (50, 400), Decimal("650")),
    ("Acier HA pour béton armé", Unit.TON, (1, 12), Decimal("98000")),
    ("Main d'oeuvre qualifiée", Unit.HOUR, (8, 160), Decimal("1200")),
    ("Carrelage grès cérame", Unit.SQUARE_METER, (20, 300), Decimal("1800")),
    ("Bordures de trottoir T2", Unit.METER, (30, 500), Decimal("950")),
]

MATERIALS = [
    ("Ciment CPJ 42.5", "GICA", Decimal("850")),
    ("Rond à béton HA12", "Tosyali", Decimal("98000")),
    ("Sable 0/4", "Sablière Ain Lahdjar", Decimal("1500")),
    ("Gravier 8/15", "ENG Sétif", Decimal("1700")),
]

# (nombre, dirección, tipo de material)
SUPPLIERS = [
    ("GICA", "Ain El Kebira, Sétif", "Ciment"),
    ("Tosyali", "Bethioua, Oran", "Acier"),
    ("Sablière Ain Lahdjar", "Ain Lahdjar, Sétif", "Sable"),
    ("ENG Sétif", "Zone industrielle, Sétif", "Gravier"),
]

TRADES = [("Maçon", Decimal("3000")), ("Coffreur", Decimal("3500")), ("Ferrailleur", Decimal("3500")),
          ("Électricien", Decimal("4000")), ("Manoeuvre", Decimal("2000"))]

WORKER_NAMES = ["Ali Bouzid", "Mourad Hamidi", "Yacine Ferhat", "Karim Saadi", "Nabil Khelifi",
                "Samir Mansouri", "Rachid Belkacem", "Hocine Zerrouki"]


def pick(seq):
    return random.choice(seq)


async def create_clients(store):
    service = ClientService(store)
    existing = {client["name"]: client for client in await service.list_clients()}
    clients = []
    for name, address, phone in CLIENTS:
        if name in existing:
            clients.append(existing[name])
            continue
        clients.append(await service.create_client(ClientCreate(
            name=name,
            address=address,
            phone=phone,
            total_debt=Decimal(random.randint(0, 40) * 10000)
        )))
    return clients


async def create_projects(store, clients):
    service = ProjectService(store)
    projects = []
    for (name, project_status), client in zip(PROJECTS, clients):
        start = date.today() - timedelta(days=random.randint(30, 400))
        budget = Decimal(random.randint(20, 300) * 100000)
        progress = 100 if project_status == ProjectStatus.COMPLETED else random.randint(0, 95)
        projects.append(await service.create_project(ProjectCreate(
            name=name,
            client=client["name"],
            start_date=start,
            end_date=start + timedelta(days=random.randint(120, 720)),
            status=project_status,
            budget=budget,
            expenses=(budget * Decimal(progress) / 100).quantize(Decimal("0.01")),
            progress=progress
        )))
    return projects


async def create_purchases(store, projects, count):
    service = PurchaseService(store)
    for _ in range(count):
        item, supplier, price = pick(MATERIALS)
        await service.create_purchase(PurchaseCreate(
            date=date.today() - timedelta(days=random.randint(0, 120)),
            project=pick(projects)["name"],
            item=item,
            supplier=supplier,
            quantity=Decimal(random.randint(1, 50)),
            unit_price=price,
            status=pick(list(PurchaseStatus))
        ))


async def create_suppliers(store):
    service = SupplierService(store)
    existing = {supplier["name"] for supplier in await service.list_suppliers()}
    for name, address, material_type in SUPPLIERS:
        if name not in existing:
            await service.create_supplier(SupplierCreate(name=name, address=address, material_type=material_type))


async def create_workers(store, projects):
    service = WorkerService(store)
    for name in WORKER_NAMES:
        trade, rate = pick(TRADES)
        await service.create_worker(WorkerCreate(
            name=name,
            trade=trade,
            daily_rate=rate,
            current_project=pick(projects)["name"],
            is_active=random.random() > 0.2
        ))


async def create_transactions(store, clients, count):
    service = FinanceService(store)
    for _ in range(count):
        kind = pick(list(TransactionType))
        client = pick(clients) if kind == TransactionType.INCOME else None
        await service.create_transaction(TransactionCreate(
            description="Encaissement situation" if client else "Dépense chantier",
            amount=Decimal(random.randint(1, 200) * 5000),
            date=date.today() - timedelta(days=random.randint(0, 150)),
            method=pick(list(PaymentMethod)),
            type=kind,
            category="travaux" if client else pick(["matériaux", "salaires", "location engins"]),
            client_id=client["id"] if client else None
        ))


async def create_invoices(store, clients, count):
    created = []
    for _ in range(count):
        builder = InvoiceBuilder(pick([InvoiceType.PROFORMA, InvoiceType.FINAL]))
        builder.client_id = pick(clients)["id"]
        builder.due_date = date.today() + timedelta(days=random.choice([15, 30, 60]))
        for index, (description, unit, (low, high), price) in enumerate(random.sample(CATALOG, random.randint(1, 4))):
            item = builder.items[0] if index == 0 else builder.add_item()
            builder.update_item(item.id, "description", description)
            builder.update_item(item.id, "unit", unit)
            builder.update_item(item.id, "quantity", Decimal(random.randint(low, high)))
            builder.update_item(item.id, "unit_price", price)
        created.append(await builder.save(store))
    return created


async def seed(args):
    await create_tables(async_engine)
    store = SqlAlchemyRowStore(AsyncSessionLocal)

    print("Creating clients...")
    clients = await create_clients(store)
    print(f"Clients: {len(clients)}")

    print("Creating projects...")
    projects = await create_projects(store, clients)
    print(f"Projects created: {len(projects)}")

    print("Creating suppliers and workers...")
    await create_suppliers(store)
    await create_workers(store, projects)

    print("Creating purchases and transactions...")
    await create_purchases(store, projects, args.purchases)
    await create_transactions(store, clients, args.transactions)

    print("Creating invoices...")
    invoices = await create_invoices(store, clients, args.invoices)
    print(f"Invoices created: {len(invoices)}")

    if args.print_to and invoices:
        surface = FilePrintSurface(args.print_to)
        await InvoiceDocumentRenderer(store).render(invoices[0]["id"], surface)
        print(f"Invoice {invoices[0]['id']} printed to {surface.path}")

    print("\nSeed completed.")
    await async_engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed construction company demo data")
    parser.add_argument("--invoices", type=int, default=20)
    parser.add_argument("--purchases", type=int, default=40)
    parser.add_argument("--transactions", type=int, default=60)
    parser.add_argument("--print-to", default=None, help="Ruta del HTML de la primera factura")
    parser.add_argument("--seed", type=int, default=None, help="Semilla aleatoria reproducible")
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)
    asyncio.run(seed(args))


if __name__ == "__main__":
    main()
