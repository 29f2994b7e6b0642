import logging

from motor.motor_asyncio import AsyncIOMotorClient

from jobapps import config

logger = logging.getLogger(__name__)


async def connect_to_mongo(uri: str = config.MONGO_URI, db_name: str = config.MONGO_DB):
    """Open the client, check the server answers, return (client, db)."""
    if not uri:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    # tz_aware keeps last_updated / posted_date as UTC-aware datetimes on read
    client = AsyncIOMotorClient(
        uri,
        serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS,
        tz_aware=True,
    )
    await client.admin.command("ping")

    if "mongodb+srv" in uri:
        logger.info("✅ Connected to MongoDB Atlas (db=%s)", db_name)
    elif "localhost" in uri or "127.0.0.1" in uri:
        logger.warning("⚠️  Connected to LOCAL MongoDB (db=%s)", db_name)
    else:
        logger.info("✅ Connected to MongoDB (db=%s)", db_name)

    return client, client[db_name]


def close_mongo_connection(client):
    if client:
        client.close()
        logger.info("MongoDB connection closed")
