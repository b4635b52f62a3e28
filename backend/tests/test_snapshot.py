"""
Tests for loading analysis snapshots from the database.

Uses an in-memory SQLite database per test.
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, to_async_url
from app.models import Career, CareerRequirementRow, Skill, UserSkill
from app.services.careers import Importance
from app.services.skill_gaps import SkillGapAnalyzer
from app.services.snapshot import load_snapshot


async def make_session():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine, async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)()


async def seed(session):
    session.add_all([
        Skill(
            id="docker",
            name="Docker",
            slug="docker",
            category="DevOps",
            proficiency_levels=[
                {"level": "Beginner", "hours_to_achieve": 15, "prerequisites": ["linux"]},
                {"level": "Intermediate", "hours_to_achieve": 25},
            ],
        ),
        Skill(
            id="linux",
            name="Linux",
            slug="linux",
            category="DevOps",
            proficiency_levels=[{"level": "Beginner", "hours_to_achieve": 10}],
        ),
        Career(id="c-devops", slug="devops-engineer", name="DevOps Engineer"),
        Career(id="c-admin", slug="sysadmin", name="Administrator"),
        CareerRequirementRow(
            career_id="c-devops", skill_id="docker", required_level=2,
            importance="essential", position=1,
        ),
        CareerRequirementRow(
            career_id="c-devops", skill_id="linux", required_level=1,
            importance="medium", position=0,
        ),
        CareerRequirementRow(
            career_id="c-devops", skill_id="removed-skill", required_level=2,
            importance="low", position=2,
        ),
        UserSkill(user_id="alice", skill_id="linux", current_level=1, self_assessment=3.5),
        UserSkill(user_id="bob", skill_id="docker", current_level=2),
    ])
    await session.commit()


class TestLoadSnapshot:
    """Snapshot loading through one session."""

    @pytest.mark.asyncio
    async def test_loads_catalog(self):
        engine, session = await make_session()
        try:
            await seed(session)
            snapshot = await load_snapshot(session, "alice")

            assert len(snapshot.catalog) == 2
            docker = snapshot.catalog.get("docker")
            assert docker.hours_for_level(2) == 25
            assert docker.prerequisites_between(0, 1) == {"linux"}
        finally:
            await session.close()
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_loads_careers_with_ordered_requirements(self):
        engine, session = await make_session()
        try:
            await seed(session)
            snapshot = await load_snapshot(session, "alice")

            assert [c.slug for c in snapshot.resolver.careers()] == [
                "sysadmin",
                "devops-engineer",
            ]
            devops = snapshot.resolver.resolve("devops-engineer")
            assert [r.skill_id for r in devops.requirements] == [
                "linux",
                "docker",
                "removed-skill",
            ]
            assert devops.requirements[0].importance == Importance.IMPORTANT
            assert devops.requirements[2].importance == Importance.NICE_TO_HAVE
            assert snapshot.resolver.resolve("sysadmin").requirements == ()
        finally:
            await session.close()
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_loads_only_the_callers_skills(self):
        engine, session = await make_session()
        try:
            await seed(session)
            snapshot = await load_snapshot(session, "alice")

            assert snapshot.user_id == "alice"
            assert set(snapshot.user_skills) == {"linux"}
            assert snapshot.user_skills["linux"].current_level == 1
            assert snapshot.user_skills["linux"].self_assessment == 3.5
        finally:
            await session.close()
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_snapshot_feeds_analyzer(self):
        engine, session = await make_session()
        try:
            await seed(session)
            snapshot = await load_snapshot(session, "alice")
            analyzer = SkillGapAnalyzer(catalog=snapshot.catalog, resolver=snapshot.resolver)

            analysis = analyzer.get_career_gap_analysis("devops-engineer", snapshot.user_skills)

            assert analysis.total_skills == 3
            assert analysis.skills_analyzed == 2
            assert analysis.skills_met == 1
            assert analysis.skills_missing == 1
            assert analysis.estimated_time_to_complete.total_weeks == 3
        finally:
            await session.close()
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_empty_database(self):
        engine, session = await make_session()
        try:
            snapshot = await load_snapshot(session, "nobody")

            assert len(snapshot.catalog) == 0
            assert len(snapshot.resolver) == 0
            assert snapshot.user_skills == {}
        finally:
            await session.close()
            await engine.dispose()


class TestDatabaseUrl:
    def test_sqlite_url_uses_aiosqlite(self):
        assert to_async_url("sqlite:///./data/skillgap.db") == "sqlite+aiosqlite:///./data/skillgap.db"

    def test_other_urls_are_unchanged(self):
        url = "postgresql+asyncpg://user@localhost/skillgap"
        assert to_async_url(url) == url
