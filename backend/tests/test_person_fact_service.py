from hello_ai.data.joe_facts import JOE_SEED_FACTS
from hello_ai.services.person_fact_service import (
    get_person_facts,
    seed_person_facts_if_needed,
    upsert_person_fact,
)


def test_seed_when_empty(executor):
    assert seed_person_facts_if_needed(executor) == len(JOE_SEED_FACTS)

    facts = get_person_facts(executor)
    assert len(facts) == len(JOE_SEED_FACTS)
    assert [f.key for f in facts] == sorted(f.key for f in facts)


def test_seed_is_skipped_when_up_to_date(executor):
    seed_person_facts_if_needed(executor)

    assert seed_person_facts_if_needed(executor) == 0


def test_seed_fills_in_when_behind(executor):
    upsert_person_fact(executor, "tone", "Quiet", "communication")

    seed_person_facts_if_needed(executor)

    facts = {f.key: f for f in get_person_facts(executor)}
    assert len(facts) == len(JOE_SEED_FACTS)
    assert facts["tone"].value == "Direct"


def test_upsert_replaces_value_and_category(executor):
    upsert_person_fact(executor, "coffee_order", "espresso")
    upsert_person_fact(executor, "coffee_order", "regular drip coffee", "preferences")

    facts = get_person_facts(executor)
    assert len(facts) == 1
    assert (facts[0].value, facts[0].category) == ("regular drip coffee", "preferences")
