"""End-to-end mapping of a person graph with renamed, nested and enum properties."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

import pytest

from pymapper import Mapper

# ---------------------------------------------------------------------------
# Source model
# ---------------------------------------------------------------------------


class SourceStatus(Enum):
    ACTIVE = 1
    INACTIVE = 2
    PENDING = 3


@dataclass
class SourceAddress:
    street: str = ""
    city: str = ""
    zip_code: str = ""


@dataclass
class SourceSkill:
    name: str = ""
    years_of_experience: int = 0


@dataclass
class SourcePerson:
    id: int = 0
    name: str = ""
    birthday: datetime | None = None
    address: SourceAddress | None = None
    skills: list[SourceSkill] = field(default_factory=list)
    status: SourceStatus = SourceStatus.PENDING


# ---------------------------------------------------------------------------
# Target model
# ---------------------------------------------------------------------------


class TargetStatus(Enum):
    ACTIVE = 1
    INACTIVE = 2
    PENDING = 3


@dataclass
class TargetAddress:
    street: str = ""
    city: str = ""
    postal_code: str = ""


@dataclass
class TargetSkill:
    title: str = ""
    experience: int = 0


@dataclass
class TargetPerson:
    id: int = 0
    full_name: str | None = None
    date_of_birth: datetime | None = None
    home_address: TargetAddress | None = None
    abilities: list[TargetSkill] = field(default_factory=list)
    user_status: TargetStatus | None = None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def source_person() -> SourcePerson:
    return SourcePerson(
        id=1,
        name="John Doe",
        birthday=datetime(1985, 5, 15),
        address=SourceAddress(street="123 Main St", city="New York", zip_code="10001"),
        skills=[
            SourceSkill(name="Programming", years_of_experience=5),
            SourceSkill(name="Design", years_of_experience=3),
        ],
        status=SourceStatus.ACTIVE,
    )


def configure_person(mapper: Mapper) -> None:
    (
        mapper.configure(SourcePerson, TargetPerson)
        .for_member(lambda s: s.name, lambda t: t.full_name)
        .for_member(lambda s: s.birthday, lambda t: t.date_of_birth)
        .for_member(lambda s: s.address, lambda t: t.home_address)
        .for_member(lambda s: s.skills, lambda t: t.abilities)
        .for_member(lambda s: s.status, lambda t: t.user_status)
    )


@pytest.fixture
def mapper() -> Mapper:
    mapper = Mapper()
    configure_person(mapper)
    mapper.configure(SourceAddress, TargetAddress).for_member(lambda s: s.zip_code, lambda t: t.postal_code)
    (
        mapper.configure(SourceSkill, TargetSkill)
        .for_member(lambda s: s.name, lambda t: t.title)
        .for_member(lambda s: s.years_of_experience, lambda t: t.experience)
    )
    return mapper


@pytest.fixture
def ignoring_mapper() -> Mapper:
    mapper = Mapper()
    configure_person(mapper)
    mapper.configure(SourcePerson, TargetPerson).ignore(lambda t: t.full_name)
    return mapper


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestPersonMapping:
    def test_full_graph(self, mapper, source_person):
        target = mapper.map(source_person, TargetPerson)

        assert target == TargetPerson(
            id=1,
            full_name="John Doe",
            date_of_birth=datetime(1985, 5, 15),
            home_address=TargetAddress(street="123 Main St", city="New York", postal_code="10001"),
            abilities=[
                TargetSkill(title="Programming", experience=5),
                TargetSkill(title="Design", experience=3),
            ],
            user_status=TargetStatus.ACTIVE,
        )

    def test_enum_is_matched_by_value(self, mapper, source_person):
        assert mapper.map(source_person, TargetPerson).user_status is TargetStatus.ACTIVE

    def test_collection_of_people(self, mapper, source_person):
        people = mapper.map_all([source_person, source_person], TargetPerson)

        assert len(people) == 2
        assert people[0] == people[1]
        assert people[0] is not people[1]

    def test_nested_values_are_new_objects(self, mapper, source_person):
        target = mapper.map(source_person, TargetPerson)

        assert target.abilities is not source_person.skills
        assert isinstance(target.home_address, TargetAddress)


class TestIgnoringMapper:
    def test_ignored_name_stays_default(self, ignoring_mapper, source_person):
        target = ignoring_mapper.map(source_person, TargetPerson)

        assert target.full_name is None
        assert target.id == 1
        assert target.date_of_birth == datetime(1985, 5, 15)
        assert target.user_status is TargetStatus.ACTIVE

    def test_nested_pairs_without_rules_match_by_name(self, ignoring_mapper, source_person):
        target = ignoring_mapper.map(source_person, TargetPerson)

        assert target.home_address == TargetAddress(street="123 Main St", city="New York", postal_code="")
        assert target.abilities == [TargetSkill(), TargetSkill()]

    def test_first_mapper_is_unaffected(self, mapper, ignoring_mapper, source_person):
        ignoring_mapper.map(source_person, TargetPerson)

        assert mapper.map(source_person, TargetPerson).full_name == "John Doe"
