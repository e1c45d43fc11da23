# city_explorer/schemas/resources.py

from pydantic import BaseModel, ConfigDict
from typing import Optional


class LocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    search_query: str
    formatted_query: str
    latitude: float
    longitude: float


class WeatherOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    forecast: Optional[str] = None
    time: str
    created_at: int


class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    link: Optional[str] = None
    name: str
    event_date: Optional[str] = None
    summary: Optional[str] = None


class MovieOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    overview: Optional[str] = None
    average_votes: Optional[float] = None
    total_votes: Optional[float] = None
    image_url: Optional[str] = None
    popularity: Optional[float] = None
    released_on: Optional[str] = None


class YelpOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    url: Optional[str] = None
    image_url: Optional[str] = None
    rating: Optional[float] = None
    price: Optional[str] = None
