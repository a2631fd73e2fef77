# portfolio_api/tests/test_seed.py
from portfolio_api.repositories import ProfileRepository, ProjectRepository, SkillRepository
from portfolio_api.scripts.seed_portfolio import seed

DOCUMENT = {
    "profile": {"bio": ["Hello"]},
    "skills": [{"category": "Languages", "items": ["Python"]}],
    "projects": [{"id": "site", "title": "Site", "year": 2024}, {"title": "No year"}],
    "github_stats": {"username": "octo", "contributions": 10},
}


def test_seed_is_idempotent(db):
    assert seed(db, DOCUMENT) == {
        "profile": 1, "github_stats": 1, "skills": 1, "experiences": 0, "projects": 1, "posts": 0,
    }
    second = seed(db, DOCUMENT)
    assert second["skills"] == 0
    assert second["projects"] == 0

    assert ProfileRepository(db).get().bio == ["Hello"]
    assert [s.category for s in SkillRepository(db).find_all()] == ["Languages"]
    assert [p.id for p in ProjectRepository(db).find_all()] == ["site"]
