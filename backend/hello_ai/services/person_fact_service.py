"""
Person facts: small reference table used to bias Joe-bot's replies toward the persona.
Read-only at chat time; written only through upsert/seed.
"""
import logging

from hello_ai.data.joe_facts import JOE_SEED_FACTS, SeedFact
from hello_ai.db.executor import SqlExecutor
from hello_ai.models.person_fact import PersonFact

logger = logging.getLogger(__name__)


def get_person_facts(executor: SqlExecutor) -> list[PersonFact]:
    result = executor.execute("SELECT key, value, category FROM person_facts ORDER BY key ASC")
    return [PersonFact(key=r["key"], value=r["value"], category=r.get("category")) for r in result.rows]


def upsert_person_fact(executor: SqlExecutor, key: str, value: str, category: str | None = None) -> None:
    executor.execute(
        "INSERT INTO person_facts (key, value, category) VALUES (:key, :value, :category) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value, category = excluded.category",
        {"key": key, "value": value, "category": category},
    )


def seed_person_facts_if_needed(executor: SqlExecutor, seed: list[SeedFact] | None = None) -> int:
    """
    Upsert every seed fact when the table has fewer rows than the seed list
    (empty, or new facts were added to JOE_SEED_FACTS). Returns count upserted.
    """
    seed = JOE_SEED_FACTS if seed is None else seed
    count = executor.execute("SELECT COUNT(*) AS n FROM person_facts").first()
    existing = int(count["n"]) if count else 0
    if existing >= len(seed):
        return 0
    for fact in seed:
        upsert_person_fact(executor, fact["key"], fact["value"], fact.get("category"))
    logger.info("Seeded %s person facts (had %s)", len(seed), existing)
    return len(seed)
