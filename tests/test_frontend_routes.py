import pytest

from app.frontend.routes import ROUTES, resolve_route


def test_route_table_paths():
    assert [r.path for r in ROUTES] == ["", "login", "signup", "movies"]


def test_root_redirects_to_login():
    route = resolve_route("/")

    assert route.path == "login"
    assert route.component == "LoginComponent"


@pytest.mark.parametrize("path,component", [
    ("login", "LoginComponent"),
    ("/signup", "SignupComponent"),
    ("/movies/", "MoviesComponent"),
])
def test_static_pages(path, component):
    assert resolve_route(path).component == component


def test_unknown_path_is_not_found():
    assert resolve_route("/admin") is None
    assert resolve_route("loginx") is None
