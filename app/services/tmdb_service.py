import requests
import os
from typing import Dict, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

# TMDB Service to interact with The Movie Database API
class TMDBService:
    BASE_URL = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
    API_KEY = os.getenv("TMDB_API_KEY")

    # Internal method to make GET requests to TMDB API
    @classmethod
    def _make_request(cls, endpoint: str, params: Optional[Dict] = None) -> Dict:
        """
        Make HTTP request to TMDB API.

        Args:
            endpoint: API endpoint (e.g., "/movie/278")
            params: Query parameters

        Returns:
            JSON response from TMDB

        Raises:
            HTTPException: If API key is missing or request fails
        """
        if not cls.API_KEY:
            raise HTTPException(status_code=502, detail="TMDB API key not configured")
        params = params or {}
        params['api_key'] = cls.API_KEY
        url = f"{cls.BASE_URL}{endpoint}"

        try:
            response = requests.get(url, params=params, timeout=10)
            response.raise_for_status()
            logger.debug(f"TMDB API request successful: {endpoint}")
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"TMDB API error for {endpoint}: {str(e)}")
            raise HTTPException(status_code=502, detail=f"TMDB API error: {str(e)}")

    @classmethod
    def get_movie_details(cls, movie_id: int) -> Dict:
        """Get catalog fields (title, overview, poster, rating) for a TMDB id."""
        return cls._make_request(f"/movie/{movie_id}")
