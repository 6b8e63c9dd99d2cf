import threading
from unittest.mock import MagicMock

import pytest

from framemint.exception import RunInProgressException, UploadFailedException
from framemint.server import RunGuard, create_app


@pytest.fixture
def client(orchestrator, collection_data, nft_data):
    app = create_app(orchestrator, collection_data, [nft_data])
    return app.test_client()


def test_start_main_function(client, mint_context):
    response = client.post("/start-main-function")
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Main function executed successfully"
    assert body["collection"] == "mint0"
    assert body["members"] == ["mint1"]
    assert len(body["run_id"]) == 32
    assert mint_context.verified == {"mint1"}


def test_each_request_gets_a_run_id(client):
    first = client.post("/start-main-function").get_json()["run_id"]
    second = client.post("/start-main-function").get_json()["run_id"]
    assert first != second


def test_failure_returns_500(collection_data, nft_data):
    orchestrator = MagicMock()
    orchestrator.run.side_effect = UploadFailedException("storage is down")
    client = create_app(orchestrator, collection_data, [nft_data]).test_client()

    response = client.post("/start-main-function")

    assert response.status_code == 500
    assert "storage is down" in response.get_json()["message"]
    # the guard is released after a failure
    orchestrator.run.side_effect = None
    orchestrator.run.return_value.to_primitive.return_value = {"run_id": "x"}
    assert client.post("/start-main-function").status_code == 200


def test_busy_guard_returns_409(collection_data, nft_data):
    orchestrator = MagicMock()
    app = create_app(orchestrator, collection_data, [nft_data])
    app.extensions["framemint_guard"].acquire("active")

    response = app.test_client().post("/start-main-function")

    assert response.status_code == 409
    assert response.get_json() == {
        "message": "A mint run is already in progress",
        "run_id": "active",
    }
    orchestrator.run.assert_not_called()


def test_overlapping_request_rejected(collection_data, nft_data):
    started = threading.Event()
    finish = threading.Event()

    active = []

    def slow_run(collection, members, run_id):
        active.append(run_id)
        started.set()
        finish.wait(5)
        raise UploadFailedException("interrupted")

    orchestrator = MagicMock()
    orchestrator.run.side_effect = slow_run
    app = create_app(orchestrator, collection_data, [nft_data])

    responses = []
    worker = threading.Thread(
        target=lambda: responses.append(app.test_client().post("/start-main-function"))
    )
    worker.start()
    assert started.wait(5)

    rejected = app.test_client().post("/start-main-function")
    finish.set()
    worker.join(5)

    assert rejected.status_code == 409
    assert rejected.get_json()["run_id"] == active[0]
    assert responses[0].status_code == 500
    assert orchestrator.run.call_count == 1


def test_get_not_allowed(client):
    assert client.get("/start-main-function").status_code == 405


def test_run_guard():
    guard = RunGuard()
    guard.acquire("a")
    assert guard.active_run == "a"
    with pytest.raises(RunInProgressException) as e:
        guard.acquire("b")
    assert e.value.args == ("a",)
    assert guard.active_run == "a"
    guard.release()
    assert guard.active_run is None
    guard.acquire("b")
    assert guard.active_run == "b"
