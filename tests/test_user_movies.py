from datetime import datetime, timezone

import pytest
from sqlalchemy import select, func
from fastapi import HTTPException

from app.models.movie import Movie
from app.models.user import User
from app.models.user_movie import UserMovie
from app.models.deletion_log import DeletionLog
from app.schemas.movie import MovieDetails
from app.services import movie_service
from app.services.movie_service import MovieService
from app.utils.security import hash_password

SHAWSHANK = {
    "movieId": 278,
    "movieDetails": {
        "title": "The Shawshank Redemption",
        "overview": "Two imprisoned men bond over a number of years.",
        "poster_path": "/path/to/poster1.jpg",
        "vote_average": 9.3,
    },
}


@pytest.fixture
def user(db_session):
    user = User(username="testuser_movies", password=hash_password("password123"))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def godfather(db_session):
    movie = Movie(tmdb_id=238, title="The Godfather", overview="Crime family.", vote_average=9.2)
    db_session.add(movie)
    db_session.commit()
    db_session.refresh(movie)
    return movie


def test_add_movie_creates_catalog_entry_and_association(client, db_session, user):
    response = client.post(f"/user/{user.id}/movies", json=SHAWSHANK)

    assert response.status_code == 201
    body = response.json()
    assert body["tmdbId"] == 278

    db_session.expire_all()
    movie = db_session.get(Movie, body["movieId"])
    assert movie.tmdb_id == 278
    assert movie.title == "The Shawshank Redemption"
    assert float(movie.vote_average) == pytest.approx(9.3)
    assert db_session.get(UserMovie, (user.id, movie.id)) is not None


def test_add_existing_catalog_movie_reuses_row(client, db_session, user, godfather):
    payload = {"movieId": 238, "movieDetails": {"title": "Different title"}}

    response = client.post(f"/user/{user.id}/movies", json=payload)

    assert response.status_code == 201
    assert response.json()["movieId"] == godfather.id
    db_session.expire_all()
    assert db_session.query(Movie).count() == 1
    assert db_session.get(Movie, godfather.id).title == "The Godfather"


def test_adding_same_movie_twice_conflicts_and_keeps_one_entry(client, user):
    assert client.post(f"/user/{user.id}/movies", json=SHAWSHANK).status_code == 201

    response = client.post(f"/user/{user.id}/movies", json=SHAWSHANK)

    assert response.status_code == 409
    movies = client.get(f"/user/{user.id}/movies").json()
    assert [m["tmdb_id"] for m in movies] == [278]


def test_add_movie_for_unknown_user_is_not_found(client, db_session):
    response = client.post("/user/999/movies", json=SHAWSHANK)

    assert response.status_code == 404
    db_session.expire_all()
    assert db_session.query(Movie).count() == 0


def test_add_movie_without_details_fetches_from_tmdb(client, db_session, user, monkeypatch):
    calls = []

    def fake_details(tmdb_id):
        calls.append(tmdb_id)
        return {"title": "The Dark Knight", "overview": "Batman.", "poster_path": "/dk.jpg", "vote_average": 9.0}

    monkeypatch.setattr(movie_service.TMDBService, "get_movie_details", staticmethod(fake_details))

    response = client.post(f"/user/{user.id}/movies", json={"movieId": 155})

    assert response.status_code == 201
    assert calls == [155]
    db_session.expire_all()
    assert db_session.query(Movie).filter(Movie.tmdb_id == 155).one().title == "The Dark Knight"


def test_tmdb_failure_surfaces_as_bad_gateway(client, db_session, user, monkeypatch):
    def failing_details(tmdb_id):
        raise HTTPException(status_code=502, detail="TMDB API error: timeout")

    monkeypatch.setattr(movie_service.TMDBService, "get_movie_details", staticmethod(failing_details))

    response = client.post(f"/user/{user.id}/movies", json={"movieId": 155})

    assert response.status_code == 502
    db_session.expire_all()
    assert db_session.query(UserMovie).count() == 0


def test_list_user_movies(client, user, godfather):
    client.post(f"/user/{user.id}/movies", json=SHAWSHANK)
    client.post(f"/user/{user.id}/movies", json={"movieId": 238})

    response = client.get(f"/user/{user.id}/movies")

    assert response.status_code == 200
    titles = [m["title"] for m in response.json()]
    assert sorted(titles) == ["The Godfather", "The Shawshank Redemption"]
    assert client.get("/user/999/movies").status_code == 404


def test_remove_movie_writes_exactly_one_deletion_log(client, db_session, user):
    movie_id = client.post(f"/user/{user.id}/movies", json=SHAWSHANK).json()["movieId"]
    before = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)

    response = client.delete(f"/user/{user.id}/movies/{movie_id}")

    assert response.status_code == 200
    assert response.json()["movieId"] == movie_id
    assert client.get(f"/user/{user.id}/movies").json() == []

    db_session.expire_all()
    logs = db_session.query(DeletionLog).all()
    assert len(logs) == 1
    assert (logs[0].user_id, logs[0].movie_id) == (user.id, movie_id)
    assert logs[0].deleted_at.replace(tzinfo=None) >= before
    # Catalog entry stays
    assert db_session.get(Movie, movie_id) is not None


def test_remove_missing_association_is_not_found_and_not_logged(client, db_session, user, godfather):
    response = client.delete(f"/user/{user.id}/movies/{godfather.id}")

    assert response.status_code == 404
    db_session.expire_all()
    assert db_session.query(DeletionLog).count() == 0


def test_deletion_logs_endpoint_filters(client, user, godfather):
    client.post(f"/user/{user.id}/movies", json={"movieId": 238})
    client.delete(f"/user/{user.id}/movies/{godfather.id}")

    logs = client.get("/deletion-logs", params={"user_id": user.id}).json()
    assert [(log["user_id"], log["movie_id"]) for log in logs] == [(user.id, godfather.id)]
    assert client.get("/deletion-logs", params={"user_id": user.id + 1}).json() == []


def test_list_movies(client, godfather):
    response = client.get("/movies")

    assert response.status_code == 200
    [movie] = response.json()
    assert movie["title"] == "The Godfather"
    assert movie["vote_average"] == pytest.approx(9.2)


def test_create_catalog_movie_rejects_duplicate_tmdb_id(client, godfather):
    payload = {"tmdb_id": 238, "title": "The Godfather (copy)"}

    response = client.post("/movies", json=payload)

    assert response.status_code == 409
    assert client.post("/movies", json={"tmdb_id": 680, "title": "Pulp Fiction"}).status_code == 201


def test_delete_catalog_movie_logs_every_affected_user(client, db_session, user, godfather):
    other = User(username="bob", password=hash_password("password123"))
    db_session.add(other)
    db_session.commit()
    user_id, other_id, movie_id = user.id, other.id, godfather.id
    for owner_id in (user_id, other_id):
        client.post(f"/user/{owner_id}/movies", json={"movieId": 238})

    response = client.delete(f"/movies/{movie_id}")

    assert response.status_code == 204
    db_session.expire_all()
    assert db_session.query(UserMovie).count() == 0
    logs = db_session.query(DeletionLog).filter(DeletionLog.movie_id == movie_id).all()
    assert sorted(log.user_id for log in logs) == sorted([user_id, other_id])
    assert client.delete(f"/movies/{movie_id}").status_code == 404


def test_ensure_movie_is_a_get_or_create(db_session, godfather):
    existing = MovieService.ensure_movie(db_session, 238, MovieDetails(title="Ignored"))
    created = MovieService.ensure_movie(db_session, 155, MovieDetails(title="The Dark Knight", vote_average=9.0))
    db_session.commit()

    assert existing.id == godfather.id
    assert existing.title == "The Godfather"
    assert created.id is not None
    assert db_session.query(Movie).count() == 2


def test_orm_delete_of_association_is_always_logged(db_session, user, godfather):
    db_session.add(UserMovie(user_id=user.id, movie_id=godfather.id))
    db_session.commit()

    link = db_session.get(UserMovie, (user.id, godfather.id))
    db_session.delete(link)
    db_session.flush()
    assert db_session.query(DeletionLog).count() == 1

    db_session.rollback()

    # Log row rolled back together with the delete
    assert db_session.query(DeletionLog).count() == 0
    assert db_session.get(UserMovie, (user.id, godfather.id)) is not None


def test_catalog_insert_race_reuses_the_winning_row(client, db_session, user, godfather, monkeypatch):
    # First lookup misses, as if another request inserted the movie in between
    real_lookup = MovieService.find_by_tmdb_id
    lookups = []

    def racing_lookup(db, tmdb_id):
        lookups.append(tmdb_id)
        return None if len(lookups) == 1 else real_lookup(db, tmdb_id)

    monkeypatch.setattr(MovieService, "find_by_tmdb_id", staticmethod(racing_lookup))
    user_id, movie_id = user.id, godfather.id

    response = client.post(f"/user/{user_id}/movies", json={"movieId": 238, "movieDetails": {"title": "The Godfather"}})

    assert response.status_code == 201
    assert response.json()["movieId"] == movie_id
    assert lookups == [238, 238]
    db_session.expire_all()
    assert db_session.query(Movie).filter(Movie.tmdb_id == 238).count() == 1
    assert db_session.get(UserMovie, (user_id, movie_id)) is not None


def test_deletion_timestamp_comes_from_database_clock(client, db_session, user, godfather):
    user_id, movie_id = user.id, godfather.id
    client.post(f"/user/{user_id}/movies", json={"movieId": 238})
    saved_at = db_session.get(UserMovie, (user_id, movie_id)).created_at

    client.delete(f"/user/{user_id}/movies/{movie_id}")

    db_session.expire_all()
    db_now = db_session.execute(select(func.now())).scalar()
    [log] = db_session.query(DeletionLog).all()
    assert saved_at.replace(tzinfo=None) <= log.deleted_at.replace(tzinfo=None) <= db_now.replace(tzinfo=None)
