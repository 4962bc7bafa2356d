"""Tests for engine construction."""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from catalog.models import Brand, BrandCategory


def test_sqlite_foreign_keys_are_enforced(session: Session):
    assert session.connection().exec_driver_sql("PRAGMA foreign_keys").scalar_one() == 1


def test_link_to_missing_category_is_rejected(session: Session):
    brand = Brand(name="Acme")
    session.add(brand)
    session.commit()

    session.add(BrandCategory(brand_id=brand.id, category_id=999))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()
