"""HTTP trigger running the mint sequence on request.

Only one run is active at a time. A request arriving while a run is in
progress is rejected with 409 and the id of the active run.
"""

import threading
import uuid
from typing import Optional, Sequence

from flask import Flask, jsonify

from framemint.exception import RunInProgressException
from framemint.logging import logger
from framemint.nft import CollectionNftData, NftData
from framemint.orchestrator import MintOrchestrator

__all__ = ["create_app", "RunGuard"]


class RunGuard:
    """Lets a single run through and remembers its token."""

    def __init__(self):
        self._lock = threading.Lock()
        self.active_run: Optional[str] = None

    def acquire(self, run_id: str):
        """Start ``run_id``.

        Raises:
            :class:`RunInProgressException`: When another run is active, carrying
                the id of that run.
        """
        if not self._lock.acquire(blocking=False):
            raise RunInProgressException(self.active_run)
        self.active_run = run_id

    def release(self):
        self.active_run = None
        self._lock.release()


def create_app(
    orchestrator: MintOrchestrator,
    collection_data: CollectionNftData,
    members: Sequence[NftData],
) -> Flask:
    app = Flask(__name__)
    guard = RunGuard()
    app.extensions["framemint_guard"] = guard

    @app.route("/start-main-function", methods=["POST"])
    def start_main_function():
        run_id = uuid.uuid4().hex
        try:
            guard.acquire(run_id)
        except RunInProgressException as e:
            return (
                jsonify(
                    {
                        "message": "A mint run is already in progress",
                        "run_id": e.args[0],
                    }
                ),
                409,
            )
        try:
            result = orchestrator.run(collection_data, members, run_id=run_id)
        except Exception as e:
            logger.exception(f"Mint run {run_id} failed")
            return (
                jsonify(
                    {
                        "message": f"Error executing main function: {e}",
                        "run_id": run_id,
                    }
                ),
                500,
            )
        finally:
            guard.release()

        body = result.to_primitive()
        body["message"] = "Main function executed successfully"
        return jsonify(body), 200

    return app
