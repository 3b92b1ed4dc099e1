"""
End-to-end check of a running API instance.

Usage:
    python -m app.scripts.verify_api

Steps:
    1. Provision and seed the database (DESTRUCTIVE, test databases only)
    2. Run the user/movie scenario against API_URL (default http://localhost:8000)

The first failing step aborts the scenario; nothing is retried.
"""

import json
import logging
import os
import time
from typing import Any, Dict, Optional

import requests
from dotenv import load_dotenv

from app.migrations.provision_schema import SEED_MOVIES, setup_test_database

load_dotenv()
logger = logging.getLogger(__name__)

API_URL = os.getenv("API_URL", "http://localhost:8000")
NEW_PASSWORD = "newpassword456"


class ScenarioError(Exception):
    """A scenario step got an unexpected response"""

    def __init__(self, message: str, status: Optional[int] = None, endpoint: str = "",
                 method: str = "", data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.endpoint = endpoint
        self.method = method
        self.data = data

    def as_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "status": self.status,
            "endpoint": self.endpoint,
            "method": self.method,
            "data": self.data,
        }


def _call(http, method: str, url: str, body: Optional[dict] = None, expected=(200, 201)):
    """Send one request, log it, and raise ScenarioError on an unexpected status"""
    logger.info(f"{method} {url} {json.dumps(body) if body is not None else ''}".rstrip())
    send = getattr(http, method.lower())
    response = send(url, json=body) if body is not None else send(url)

    try:
        payload = response.json()
    except ValueError:
        payload = response.text
    logger.info(f"  -> {response.status_code} {payload}")

    if response.status_code not in expected:
        detail = payload.get("detail") if isinstance(payload, dict) else payload
        raise ScenarioError(
            str(detail or f"HTTP {response.status_code}"),
            status=response.status_code,
            endpoint=url,
            method=method,
            data=body,
        )
    return payload


def run_scenario(http, base_url: str = API_URL, username: Optional[str] = None) -> Dict[str, Any]:
    """
    Drive the API through signup, login, saving and removing a movie and a
    password change. `http` is anything with requests-style get/post/put/delete.
    """
    base_url = base_url.rstrip("/")
    credentials = {
        "username": username or f"testuser_{int(time.time() * 1000)}",
        "password": "password123",
    }

    logger.info("1. Testing user creation...")
    created = _call(http, "POST", f"{base_url}/users", credentials)
    user_id = created["userId"]

    logger.info("2. Testing login...")
    _call(http, "POST", f"{base_url}/login", credentials)

    logger.info("3. Testing get users...")
    users = _call(http, "GET", f"{base_url}/users")
    if not any(u["id"] == user_id for u in users):
        raise ScenarioError("Created user missing from user list", endpoint=f"{base_url}/users", method="GET")

    logger.info("4. Testing get all movies...")
    movies = _call(http, "GET", f"{base_url}/movies")
    titles = {m["title"] for m in movies}
    missing = [m["title"] for m in SEED_MOVIES if m["title"] not in titles]
    if missing:
        raise ScenarioError(f"Seeded movies missing: {missing}", endpoint=f"{base_url}/movies", method="GET")

    logger.info("5. Testing adding movie to user...")
    movie = movies[0]
    add_body = {
        "movieId": movie["tmdb_id"],
        "movieDetails": {
            "title": movie["title"],
            "overview": movie.get("overview") or "",
            "poster_path": movie.get("poster_path") or "",
            "vote_average": movie.get("vote_average") or 0,
        },
    }
    added = _call(http, "POST", f"{base_url}/user/{user_id}/movies", add_body)
    movie_id = added["movieId"]

    logger.info("6. Testing get user movies...")
    user_movies = _call(http, "GET", f"{base_url}/user/{user_id}/movies")
    if not any(m["id"] == movie_id for m in user_movies):
        raise ScenarioError("Added movie missing from user's list",
                            endpoint=f"{base_url}/user/{user_id}/movies", method="GET")

    logger.info("7. Testing delete movie from user...")
    _call(http, "DELETE", f"{base_url}/user/{user_id}/movies/{movie_id}")
    updated = _call(http, "GET", f"{base_url}/user/{user_id}/movies")
    deleted = not any(m["id"] == movie_id for m in updated)
    if deleted:
        logger.info("Test passed: Movie successfully deleted.")
    else:
        logger.error("Test failed: Movie was not deleted.")
        raise ScenarioError("Movie was not deleted",
                            endpoint=f"{base_url}/user/{user_id}/movies/{movie_id}", method="DELETE")

    logger.info("8. Testing update user password...")
    _call(http, "PUT", f"{base_url}/user/{user_id}/password", {"newPassword": NEW_PASSWORD})

    logger.info("9. Testing login with updated password...")
    _call(http, "POST", f"{base_url}/login", {"username": credentials["username"], "password": NEW_PASSWORD})

    logger.info("10. Testing login with old password is rejected...")
    _call(http, "POST", f"{base_url}/login", credentials, expected=(401,))

    logger.info("=== All tests completed successfully ===")
    return {"user_id": user_id, "movie_id": movie_id, "username": credentials["username"]}


def main() -> int:
    logger.info("Setting up test database...")
    if not setup_test_database():
        logger.error("Skipping API tests due to database setup failure")
        return 1

    logger.info("Starting API tests...")
    with requests.Session() as http:
        try:
            run_scenario(http, API_URL)
        except ScenarioError as e:
            logger.error(f"Test failed: {e.as_dict()}")
            return 1
        except requests.exceptions.RequestException as e:
            # Connectivity problem: no response to report
            failure = ScenarioError(
                str(e),
                endpoint=getattr(e.request, "url", API_URL),
                method=getattr(e.request, "method", ""),
            )
            logger.error(f"Test failed: {failure.as_dict()}")
            return 1
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    raise SystemExit(main())
