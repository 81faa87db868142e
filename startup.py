# © [2025] EDT&Partners. Licensed under CC BY 4.0.

import json

from sqlalchemy.orm import Session
from database.crud import add_missing_default_preferences, create_widget, get_widget_by_id
from database.schemas import WidgetCatalog
from logging_config import setup_logging
from lti.config import WidgetServerConfig
import alembic.config
import alembic.command

logger = setup_logging(module_name='startup')

async def run_database_migrations() -> None:
    """Run database migrations using Alembic."""
    logger.info("Starting database migrations...")
    try:
        alembic_cfg = alembic.config.Config("alembic.ini")
        logger.debug("Alembic configuration loaded successfully")

        alembic.command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.error(f"Error executing database migrations: {str(e)}")
        logger.error(f"Migration error type: {type(e).__name__}")
        raise

def load_widget_catalog(catalog_path: str) -> WidgetCatalog:
    """Load a widget catalog file: either a JSON list of widgets or an object with a "widgets" list."""
    with open(catalog_path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, list):
        data = {"widgets": data}
    return WidgetCatalog.model_validate(data)

async def seed_widget_catalog(db: Session, catalog_path: str) -> int:
    """Register catalog widgets that are missing and add their missing default preferences."""
    logger.info(f"Seeding widget catalog from {catalog_path}...")
    try:
        catalog = load_widget_catalog(catalog_path)
        created = 0
        for widget_data in catalog.widgets:
            existing_widget = get_widget_by_id(db, widget_data.id)
            if existing_widget:
                added = add_missing_default_preferences(db, existing_widget, widget_data.preferences)
                if added:
                    logger.info(f"Added {added} default preferences to widget {widget_data.id}")
                else:
                    logger.debug(f"Widget {widget_data.id} already registered")
            else:
                create_widget(db, widget_data)
                created += 1
                logger.info(f"Registered widget {widget_data.id} ({widget_data.guid})")
        logger.info(f"Widget catalog seeded, {created} new widgets")
        return created
    except Exception as e:
        logger.error(f"Error seeding widget catalog: {str(e)}")
        raise

async def run_startup_tasks(db: Session):
    logger.info("Starting application startup tasks...")

    try:
        if WidgetServerConfig.run_migrations():
            logger.info("Step 1/2: Running database migrations...")
            await run_database_migrations()
            logger.info("✓ Database migrations completed")
        else:
            logger.info("Step 1/2: Database migrations disabled")

        catalog_path = WidgetServerConfig.get_catalog_path()
        if catalog_path:
            logger.info("Step 2/2: Seeding widget catalog...")
            await seed_widget_catalog(db, catalog_path)
            logger.info("✓ Widget catalog seeded")
        else:
            logger.info("Step 2/2: No widget catalog configured")

        logger.info("✓ All application startup tasks completed successfully")

    except Exception as e:
        logger.error(f"Error during startup tasks: {str(e)}")
        logger.error(f"Startup error type: {type(e).__name__}")
        raise
