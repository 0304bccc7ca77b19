# scripts/db/run_db_seed.py
# Run from the project root: python -m scripts.db.run_db_seed
from dotenv import load_dotenv
from common.config import initialize_config
from hospital.db import DbManager
from .data_template import DEPARTMENT_TEMPLATES
from .seed_db import seed_db


async def main():
    load_dotenv()
    config = initialize_config()

    _db_config = config.database
    if not _db_config:
        raise RuntimeError("Database configuration required")

    db_manager = DbManager.from_config(_db_config)
    await db_manager.verify_connection()
    await db_manager.prepare_schema(auto_create=_db_config.auto_create)

    # Two doctors and two services per department
    results = await seed_db(
        db_manager=db_manager,
        department_templates=DEPARTMENT_TEMPLATES,
        records=2,
        export_csv=False,
    )

    print(f"Seeded {sum(len(v) for v in results.values())} total records")

    await db_manager.dispose()


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
