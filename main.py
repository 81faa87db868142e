# © [2025] EDT&Partners. Licensed under CC BY 4.0.

from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, HTTPException, Request
from sqlalchemy import text
from sqlalchemy.orm import Session
import uvicorn

from constants import INTERNAL_SERVER_ERROR_MESSAGE
from database.db import init_db, get_db
from logging_config import setup_logging
from lti.router import router as lti_router
from startup import run_startup_tasks

# Configure logging first
logger = setup_logging(module_name='main')

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application lifespan...")
    db = None
    try:
        logger.info("Initializing database connection...")
        db = next(get_db())
        logger.info("Database connection established successfully")

        await run_startup_tasks(db)

    except Exception as e:
        logger.error(f"Critical error during application startup: {str(e)}")
        logger.error(f"Error type: {type(e).__name__}")
        # Re-raise the exception to prevent the application from starting with errors
        raise
    finally:
        if db:
            try:
                db.close()
                logger.debug("Database connection closed successfully")
            except Exception as e:
                logger.error(f"Error closing database connection: {str(e)}")

    logger.info("Application startup completed, yielding control...")
    yield

    logger.info("Application shutdown initiated...")

app = FastAPI(
    lifespan=lifespan,
    title="Widget Tool Provider",
    openapi_tags=[
        {"name": "LTI", "description": "Basic LTI launch of hosted widgets"},
    ]
)

# Basic LTI assumes one tool per endpoint URL; the last path segment names the widget
app.include_router(lti_router, prefix="/basiclti", tags=["LTI"])

# Add middleware for request logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"Request: {request.method} {request.url.path}")
    try:
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code}")
        return response
    except Exception as e:
        logger.error(f"Request failed: {str(e)}")
        raise

@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception:
        raise HTTPException(status_code=500, detail=INTERNAL_SERVER_ERROR_MESSAGE)

if __name__ == "__main__":
    init_db()
    uvicorn.run(app, host="0.0.0.0", port=8000)
