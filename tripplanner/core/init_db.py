from tripplanner.core.database import engine, Base
import tripplanner.models  # noqa: F401  registers the tables on Base.metadata

async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
