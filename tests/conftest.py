# -*- coding: utf-8 -*-
import os
import tempfile

import pytest
from eth_account import Account
from web3 import EthereumTesterProvider, Web3

# main.py connects on import, keep it away from Postgres
os.environ.setdefault(
    "DATABASE_URL", f"sqlite:///{os.path.join(tempfile.mkdtemp(), 'import.sqlite')}"
)

from db import database  # noqa: E402
from db.migrations import run_migrations  # noqa: E402
from web3_service import Web3Service  # noqa: E402

# Testing account
TESTING_PRIVATE_KEY = "10818f935e7f7b7317e2cde9841c29bca619b11b24bb9e3603542728d227cc26"
TESTING_ADDRESS = Account.from_key(TESTING_PRIVATE_KEY).address


@pytest.fixture
def db_engine(tmp_path):
    """Fresh migrated SQLite database behind the global session factory"""
    database.dispose()
    database.global_init_sqlite(str(tmp_path / "test.sqlite"))
    engine = database.get_engine()
    run_migrations(engine)
    yield engine
    database.dispose()


@pytest.fixture
def db_sess(db_engine):
    db_sess = database.create_session()
    yield db_sess
    db_sess.close()


@pytest.fixture
def client(db_engine):
    from fastapi.testclient import TestClient

    from main import app

    return TestClient(app)


@pytest.fixture
def w3():
    return Web3(EthereumTesterProvider())


@pytest.fixture
def web3_service(w3, monkeypatch):
    """Service whose rpc urls all resolve to the in-process test chain"""
    service = Web3Service()
    monkeypatch.setattr(service, "get_provider", lambda rpc: w3)
    return service


@pytest.fixture
def funded_account(w3):
    account = Account.create()
    tx_hash = w3.eth.send_transaction(
        {
            "from": w3.eth.accounts[0],
            "to": account.address,
            "value": Web3.to_wei(1, "ether"),
        }
    )
    w3.eth.wait_for_transaction_receipt(tx_hash)
    return account
