"""
Route table of the Angular frontend (src/app/app.routes.ts).

The backend never renders these pages. The table is mirrored here so page
paths can be checked without the Angular toolchain.
"""
from typing import List, Optional
from pydantic import BaseModel


class Route(BaseModel):
    path: str
    component: Optional[str] = None
    redirect_to: Optional[str] = None
    path_match: str = "prefix"


ROUTES: List[Route] = [
    Route(path="", redirect_to="login", path_match="full"),
    Route(path="login", component="LoginComponent"),
    Route(path="signup", component="SignupComponent"),
    Route(path="movies", component="MoviesComponent"),
]

# A redirect chain longer than the table means a loop
MAX_REDIRECTS = len(ROUTES)


def _matches(route: Route, path: str) -> bool:
    if route.path_match == "full" or route.path == "":
        return path == route.path
    return path == route.path or path.startswith(route.path + "/")


def resolve_route(path: str) -> Optional[Route]:
    """Resolve a browser path to the route that renders it, following redirects"""
    path = path.strip("/")
    for _ in range(MAX_REDIRECTS + 1):
        route = next((r for r in ROUTES if _matches(r, path)), None)
        if route is None or route.redirect_to is None:
            return route
        path = route.redirect_to.strip("/")
    raise RuntimeError(f"Redirect loop while resolving '{path}'")
