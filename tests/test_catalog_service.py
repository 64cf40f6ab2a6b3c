"""Tests for catalog service."""

import uuid
from datetime import date

import pytest

from scholarsync.catalog.models import Country, Scholarship, University
from scholarsync.catalog.service import (
    DuplicateEntry,
    create_item,
    delete_item,
    get_by_id,
    list_countries,
    list_scholarships,
    list_universities,
    scholarship_to_dict,
    update_item,
)


class TestCountries:
    def test_create_and_list_sorted(self, db_session):
        create_item(db_session, Country, name="Italy", code="IT")
        create_item(db_session, Country, name="Germany", code="DE")
        db_session.commit()

        assert [c.name for c in list_countries(db_session)] == ["Germany", "Italy"]

    def test_duplicate_name_rejected(self, db_session):
        create_item(db_session, Country, name="Italy", code="IT")
        db_session.commit()

        with pytest.raises(DuplicateEntry):
            create_item(db_session, Country, name="Italy", code="ITA")
        assert db_session.query(Country).count() == 1

    def test_rename_to_existing_rejected(self, db_session):
        create_item(db_session, Country, name="Italy")
        spain = create_item(db_session, Country, name="Spain")
        db_session.commit()

        with pytest.raises(DuplicateEntry):
            update_item(db_session, spain, name="Italy")


class TestUniversities:
    def test_filter_by_country(self, db_session):
        create_item(db_session, University, name="ETH Zurich", country="Switzerland", city="Zurich")
        create_item(db_session, University, name="Sapienza", country="Italy", city="Rome")
        db_session.commit()

        result = list_universities(db_session, country="Italy")
        assert [u.name for u in result] == ["Sapienza"]

    def test_update_and_delete(self, db_session):
        uni = create_item(db_session, University, name="Sapienza", country="Italy")
        db_session.commit()

        update_item(db_session, uni, city="Rome", name=None)
        db_session.commit()
        assert get_by_id(db_session, University, str(uni.id)).city == "Rome"
        assert uni.name == "Sapienza"

        assert delete_item(db_session, University, str(uni.id)) is True
        assert delete_item(db_session, University, str(uuid.uuid4())) is False
        assert delete_item(db_session, University, "bogus") is False


class TestScholarships:
    def test_ordered_by_deadline_nulls_last(self, db_session):
        create_item(db_session, Scholarship, name="Open Call", country="Italy")
        create_item(db_session, Scholarship, name="Late", country="Italy", deadline=date(2024, 9, 1))
        create_item(db_session, Scholarship, name="Early", country="Italy", deadline=date(2024, 5, 1))
        db_session.commit()

        assert [s.name for s in list_scholarships(db_session)] == ["Early", "Late", "Open Call"]

    def test_to_dict(self, db_session):
        s = create_item(db_session, Scholarship, name="DAAD", country="Germany", deadline=date(2024, 11, 15))
        data = scholarship_to_dict(s)
        assert data["deadline"] == "2024-11-15"
        assert data["description"] == ""
