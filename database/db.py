# © [2025] EDT&Partners. Licensed under CC BY 4.0.

import json
import os
import logging
from sqlalchemy import create_engine, orm
from sqlalchemy.orm import sessionmaker
from utility.aws_clients import secrets_client

logger = logging.getLogger(__name__)

ENVIRONMENT = os.getenv("ENVIRONMENT", "production")

Base = orm.declarative_base()

_ENGINE = None
_SESSION_LOCAL = None

def get_database_url_from_secret(secret_arn: str) -> str:
    if not secret_arn:
        raise ValueError("Secret ARN cannot be empty")
    response = secrets_client.get_secret_value(SecretId=secret_arn)

    if "SecretString" not in response:
        raise ValueError("SecretString not found in Secrets Manager response")

    secret = json.loads(response["SecretString"])

    # JSON Secret contains: username, password, host, port, dbname
    db_url = (
        f"postgresql+psycopg2://{secret['username']}:{secret['password']}"
        f"@{secret['host']}:{secret['port']}/{secret['dbname']}"
    )
    logger.info(db_url.replace(secret['password'], "********"))
    return db_url

def get_database_url() -> str:
    """Resolve the database URL: Secrets Manager in production, DATABASE_URL elsewhere"""
    database_secret = os.getenv("DATABASE_SECRET")
    if ENVIRONMENT == "production" and database_secret:
        database_url = get_database_url_from_secret(database_secret)
    else:
        database_url = os.getenv("DATABASE_URL")

    if not database_url:
        raise ValueError("Neither DATABASE_SECRET nor DATABASE_URL provided a database URL")
    return database_url

def get_engine():
    global _ENGINE
    if _ENGINE is None:
        database_url = get_database_url()
        if database_url.startswith("sqlite"):
            _ENGINE = create_engine(
                database_url,
                echo=False,
                connect_args={"check_same_thread": False}
            )
        else:
            _ENGINE = create_engine(
                database_url,
                echo=False,
                pool_pre_ping=True,
                pool_recycle=1800,
                pool_size=10,
                max_overflow=20,
                pool_timeout=30,
                pool_use_lifo=True
            )
    return _ENGINE

def get_session_local():
    global _SESSION_LOCAL
    if _SESSION_LOCAL is None:
        _SESSION_LOCAL = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SESSION_LOCAL

def get_db():
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    get_engine()
