"""
Flask CLI command tests.
"""

from mypos import create_app
from mypos.services.auth_service import verify_password


def test_users_list(app):
    result = app.test_cli_runner().invoke(args=["users", "list"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines == ["1\tadmin\tadmin", "2\tcashier\tcashier", "3\tkitchen\tkitchen"]


def test_hash_password(app):
    result = app.test_cli_runner().invoke(args=["users", "hash-password", "--password", "s3cret"])
    assert result.exit_code == 0
    hashed = result.output.strip()
    assert hashed.startswith("$2")
    assert verify_password("s3cret", hashed)
    assert not verify_password("other", hashed)


def test_catalog_list_empty(app):
    result = app.test_cli_runner().invoke(args=["catalog", "list"])
    assert result.exit_code == 0
    assert "Catalogue is empty." in result.output


def test_catalog_list_seeded(clock):
    app = create_app({"TESTING": True, "BCRYPT_ROUNDS": 4, "SEED_DEMO_DATA": True}, clock=clock)
    result = app.test_cli_runner().invoke(args=["catalog", "list"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 8
    assert lines[0] == "1\tPRD-001\tProduct A\tElectronics\tstock=45\tprice=22.75"
