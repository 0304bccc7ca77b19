# scripts/db/seed_db.py
import csv
from pathlib import Path
from typing import Any
from pydantic import BaseModel

from hospital.db import DbManager
from hospital.db.models import Doctor, Service
from hospital.db.schemas import DoctorCreate, ServiceCreate


SCHEMA_MAP = {
    "doctors": DoctorCreate,
    "services": ServiceCreate,
}

MODEL_MAP = {
    "doctors": Doctor,
    "services": Service,
}


def write_records_to_csv(filename: str, records: list[BaseModel]) -> None:
    """Write Pydantic schema records to CSV, lists joined with '|'."""
    if not records:
        return

    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = list(records[0].model_dump(mode="json").keys())

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for record in records:
            row = record.model_dump(mode="json")
            for key, value in row.items():
                if isinstance(value, list):
                    row[key] = "|".join(value)
            writer.writerow(row)


async def seed_db(
    db_manager: DbManager,
    department_templates: dict[str, dict[str, dict[str, Any]]],
    records: int,
    start_index: int = 0,
    export_csv: bool = False,
    csv_dir: str = "data/seed",
) -> dict[str, list[BaseModel]]:
    """
    Seed the catalog with generated doctors and services.

    Args:
        db_manager: DbManager whose tables already exist
        department_templates: department -> {"doctors": template, "services": template}
        records: Number of records to generate per collection and department
        start_index: Starting index for generated names
        export_csv: Whether to export generated records to CSV
        csv_dir: Directory to save CSV files

    Returns:
        Dict mapping collection names to the generated Pydantic schemas
    """
    generated: dict[str, list[BaseModel]] = {collection: [] for collection in SCHEMA_MAP}

    for templates in department_templates.values():
        for collection, template in templates.items():
            schema_cls = SCHEMA_MAP[collection]
            generated[collection].extend(
                schema_cls.seed_records(template, records, start_index)  # type: ignore[attr-defined]
            )

    for collection, schema_records in generated.items():
        if export_csv:
            write_records_to_csv(str(Path(csv_dir) / f"{collection}.csv"), schema_records)

        model_cls = MODEL_MAP[collection]
        orm_objects = [model_cls(**record.model_dump()) for record in schema_records]

        async with db_manager.session() as session:
            session.add_all(orm_objects)
            # Commit happens automatically on context exit

    return generated


__all__ = ["seed_db", "write_records_to_csv"]
