from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

EXACT_MATCH_ID = "exact"
UNNAMED_PLACE = "Unnamed place"


class Coordinates(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)
    # provider id of the resolved candidate, when the provider returned one
    place_id: str | None = None


class Place(BaseModel):
    """A discovered point of interest.

    The head of an unfiltered search result is a synthetic "exact match"
    entry: its name is the query text, its distance is 0 and its id is the
    resolved provider id or ``EXACT_MATCH_ID``.
    """
    id: str
    name: str = UNNAMED_PLACE
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)
    rating: float | None = None
    distance: float | None = None  # km from the resolved query location
    photo_url: str | None = None
    types: list[str] = Field(default_factory=list)

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng)

    def with_distance(self, distance_km: float) -> Place:
        return self.model_copy(update={"distance": distance_km})


class FilterSpec(BaseModel):
    """Caller-held filter configuration.

    Empty ``types``/``ratings`` leave that dimension unconstrained, ratings are
    "at least" thresholds, and ``max_distance == 0`` means no limit.
    """
    model_config = ConfigDict(frozen=True)

    types: frozenset[str] = frozenset()
    ratings: frozenset[float] = frozenset()
    max_distance: float = Field(default=0, ge=0)

    @property
    def is_empty(self) -> bool:
        return not self.types and not self.ratings and self.max_distance == 0

    def toggle_type(self, place_type: str) -> FilterSpec:
        return self.model_copy(update={"types": self.types ^ {place_type}})

    def toggle_rating(self, rating: float) -> FilterSpec:
        return self.model_copy(update={"ratings": self.ratings ^ {float(rating)}})

    def toggle_distance(self, distance_km: float) -> FilterSpec:
        # selecting the active distance again clears the limit
        new_max = 0 if self.max_distance == distance_km else distance_km
        return self.model_copy(update={"max_distance": new_max})
