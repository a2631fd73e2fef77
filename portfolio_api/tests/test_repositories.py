# portfolio_api/tests/test_repositories.py
import pytest

from portfolio_api import models
from portfolio_api.errors import BadRequestError, DatabaseError
from portfolio_api.repositories import (
    ContactRepository, ExperienceRepository, ProfileRepository, ProjectRepository,
    SkillRepository, decode_json, encode_json, generate_id,
)
from portfolio_api.schemas import Experience, Profile, Project, Skill, SocialLink


def _project(**overrides):
    data = {
        "id": generate_id(),
        "title": "Compiler",
        "description": "A toy compiler",
        "technologies": ["Rust", "LLVM"],
        "year": 2023,
    }
    data.update(overrides)
    return Project(**data)


def test_generate_id_is_unique():
    assert generate_id() != generate_id()


def test_encode_json_keeps_unicode_and_models():
    raw = encode_json([SocialLink(title="Blog", url="https://é.example")])
    assert "é" in raw
    assert decode_json(raw) == [{"title": "Blog", "url": "https://é.example", "icon": ""}]


def test_list_fields_round_trip_exactly(db):
    repo = ProjectRepository(db)
    project = _project(technologies=["b", "a", "b"], highlights=[])
    repo.create(project)

    stored = repo.find_by_id(project.id)
    assert stored.technologies == ["b", "a", "b"]
    assert stored.highlights == []
    assert stored.image_urls is None
    assert repo.decode_issues == []


def test_find_by_id_missing_returns_none(db):
    assert ProjectRepository(db).find_by_id("nope") is None


def test_update_overwrites_and_does_not_create(db):
    repo = ProjectRepository(db)
    project = _project()
    repo.create(project)

    repo.update(project.id, project.model_copy(update={"title": "Interpreter"}))
    assert repo.find_by_id(project.id).title == "Interpreter"

    ghost = _project()
    repo.update(ghost.id, ghost)
    assert repo.find_by_id(ghost.id) is None


def test_delete_reports_whether_a_row_was_removed(db):
    repo = ProjectRepository(db)
    project = _project()
    repo.create(project)

    assert repo.delete(project.id) is True
    assert repo.delete(project.id) is False
    assert repo.find_all() == []


def test_projects_ordered_by_year_then_title(db):
    repo = ProjectRepository(db)
    for title, year in [("Beta", 2022), ("Alpha", 2022), ("Gamma", 2024)]:
        repo.create(_project(title=title, year=year))

    assert [p.title for p in repo.find_all()] == ["Gamma", "Alpha", "Beta"]


def test_current_experience_listed_first(db):
    repo = ExperienceRepository(db)
    repo.create(Experience(id=generate_id(), company="Old", position="Dev", start_date="2018-01", end_date="2020-01"))
    repo.create(Experience(id=generate_id(), company="Now", position="Lead", start_date="2021-06", end_date=None))
    repo.create(Experience(id=generate_id(), company="Mid", position="Dev", start_date="2020-02", end_date="2021-05"))

    assert [e.company for e in repo.find_all()] == ["Now", "Mid", "Old"]


def test_invalid_json_degrades_and_is_recorded(db):
    row_id = generate_id()
    db.add(models.Project(id=row_id, title="Broken", description="", technologies="not json",
                          highlights='{"a": 1}', year=2020))
    db.commit()

    repo = ProjectRepository(db)
    project = repo.find_by_id(row_id)

    assert project.technologies == []
    assert project.highlights == []
    assert {issue.field for issue in repo.decode_issues} == {"technologies", "highlights"}
    assert all(issue.row_id == row_id for issue in repo.decode_issues)


def test_items_of_wrong_shape_degrade(db):
    db.add(models.Profile(id="primary", bio='["hello"]', social_links="[1, 2]",
                          education="[]", languages="[]"))
    db.commit()

    repo = ProfileRepository(db)
    profile = repo.get()

    assert profile.social_links == []
    assert profile.bio == ["hello"]
    assert [issue.field for issue in repo.decode_issues] == ["social_links"]


def test_singleton_save_upserts_under_fixed_key(db):
    repo = ProfileRepository(db)
    assert repo.get() is None

    repo.save(Profile(bio=["first"]))
    repo.save(Profile(bio=["second", "paragraph"]))

    assert repo.get().bio == ["second", "paragraph"]
    assert db.query(models.Profile).count() == 1
    assert db.query(models.Profile).first().id == "primary"


def test_database_errors_are_wrapped_and_rolled_back(db):
    repo = SkillRepository(db)
    repo.create(Skill(id=generate_id(), category="Languages", items=["Python"]))

    with pytest.raises(DatabaseError):
        repo.create(Skill(id=generate_id(), category="Languages", items=["Go"]))

    # session still usable after the rollback
    assert [s.items for s in repo.find_all()] == [["Python"]]


def test_contact_messages_cannot_be_edited(db):
    with pytest.raises(BadRequestError) as info:
        ContactRepository(db).update("x", None)
    assert info.value.status_code == 400
    assert "cannot be edited" in str(info.value)


def _stored_columns(db, project_id):
    row = db.query(models.Project).filter(models.Project.id == project_id).one()
    db.expire(row)
    return {c.name: getattr(row, c.name) for c in models.Project.__table__.columns if c.name != "updated_at"}


def test_update_with_same_value_is_idempotent(db):
    repo = ProjectRepository(db)
    project = _project()
    repo.create(project)
    changed = project.model_copy(update={"year": 2025, "highlights": ["shipped"]})

    first = repo.update(project.id, changed)
    after_first = _stored_columns(db, project.id)
    second = repo.update(project.id, changed)
    after_second = _stored_columns(db, project.id)

    assert first == second
    assert after_first == after_second
    assert repo.find_by_id(project.id) == changed
