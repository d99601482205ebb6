import logging
from typing import AsyncGenerator, Optional

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession

from api.core import settings

logger = logging.getLogger(__name__)

SKILL_ID_CONSTRAINT = (
    "CREATE CONSTRAINT skill_id_unique IF NOT EXISTS "
    "FOR (skill:Skill) REQUIRE skill.id IS UNIQUE"
)

driver: Optional[AsyncDriver] = None


async def init_db():
    global driver
    driver = AsyncGraphDatabase.driver(
        settings.NEO4J_URI, auth=(settings.NEO4J_USER, settings.NEO4J_PASSWORD)
    )
    await driver.verify_connectivity()
    logger.info(f"Connected to Neo4j at {settings.NEO4J_URI}")

    async with driver.session(database=settings.NEO4J_DATABASE) as session:
        result = await session.run(SKILL_ID_CONSTRAINT)
        await result.consume()


async def close_db():
    global driver
    if driver is not None:
        await driver.close()
        driver = None


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    if driver is None:
        raise RuntimeError("Neo4j driver is not initialized")
    async with driver.session(database=settings.NEO4J_DATABASE) as session:
        yield session
