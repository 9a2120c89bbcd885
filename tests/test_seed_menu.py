from decimal import Decimal

import bella_cucina.db as db
from bella_cucina.models import Base, MenuItem
from bella_cucina.seed_menu import MENU, seed_menu


def test_seed_menu_populates_empty_database(session_factory, monkeypatch, capsys):
    engine = session_factory.kw["bind"]
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "SessionLocal", session_factory)
    Base.metadata.drop_all(bind=engine)

    seed_menu()

    session = session_factory()
    try:
        assert session.query(MenuItem).count() == len(MENU)
        assert session.get(MenuItem, "margherita").price == Decimal("18.00")
    finally:
        session.close()
    assert f"Seeded {len(MENU)} menu items." in capsys.readouterr().out


def test_seed_menu_skips_populated_database(session_factory, monkeypatch, capsys):
    monkeypatch.setattr(db, "engine", session_factory.kw["bind"])
    monkeypatch.setattr(db, "SessionLocal", session_factory)

    seed_menu()

    assert "Not seeding again" in capsys.readouterr().out
