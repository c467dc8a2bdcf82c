"""
Utilities for Reports module

Provides CSV export functionality and common utility functions
for report generation and data formatting.
"""

import csv
import io
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List

from fastapi import Response


def create_csv_response(
    data: List[Dict[str, Any]],
    filename: str,
    headers: Dict[str, str] = None
) -> Response:
    """
    Create a CSV response from a list of dictionaries.

    Args:
        data: List of dictionaries with report data
        filename: Name for the CSV file
        headers: Optional mapping of field names to CSV headers

    Returns:
        FastAPI Response with CSV content
    """
    output = io.StringIO()
    fieldnames = list(headers.keys()) if headers else (list(data[0].keys()) if data else [])
    csv_headers = list(headers.values()) if headers else fieldnames

    writer = csv.DictWriter(output, fieldnames=fieldnames, extrasaction="ignore")
    writer.writerow(dict(zip(fieldnames, csv_headers)))
    for row in data:
        writer.writerow({key: format_csv_value(value) for key, value in row.items()})

    csv_content = output.getvalue()
    output.close()

    return Response(
        content=csv_content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={filename}",
            "Content-Type": "text/csv; charset=utf-8"
        }
    )


def format_csv_value(value: Any) -> str:
    """Format a value for CSV export."""
    if value is None:
        return ""
    elif isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, (date, datetime)):
        return value.isoformat()
    elif isinstance(value, bool):
        return "Sí" if value else "No"
    else:
        return str(value)


CSV_HEADERS = {
    "projects": {
        "name": "Proyecto",
        "client": "Cliente",
        "status": "Estado",
        "progress": "Avance (%)",
        "budget": "Presupuesto",
        "expenses": "Gastos",
        "budget_usage": "Ejecución",
    },
    "invoices": {
        "reference": "Referencia",
        "type": "Tipo",
        "status": "Estado",
        "client_name": "Cliente",
        "date": "Fecha",
        "due_date": "Vencimiento",
        "sub_total": "Subtotal",
        "tax_amount": "Impuesto",
        "total_amount": "Total",
    },
}
