# city_explorer/db/models.py
# -----------------------------------------------------------------------------
# ORM 모델 정의
# - Location: 검색어 → 정규화 주소/좌표 (모든 리소스의 조인 키)
# - Weather / Event / Movie / Yelp: 위치별 캐시 테이블 (location_id FK)
# -----------------------------------------------------------------------------
from sqlalchemy import (
    BigInteger,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)

from city_explorer.db.session import Base


class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    search_query = Column(String(255), nullable=False)
    formatted_query = Column(String(255))
    latitude = Column(Numeric(10, 7, asdecimal=False))
    longitude = Column(Numeric(10, 7, asdecimal=False))

    __table_args__ = (
        UniqueConstraint("search_query", name="uq_locations_search_query"),
    )


class Weather(Base):
    __tablename__ = "weathers"

    id = Column(Integer, primary_key=True)
    forecast = Column(String(255))
    time = Column(String(255))
    created_at = Column(BigInteger, nullable=False)  # epoch ms (수집 시각)
    location_id = Column(
        Integer, ForeignKey("locations.id"), nullable=False, index=True
    )


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True)
    link = Column(String(255))
    name = Column(String(255))
    event_date = Column(String(255))
    summary = Column(Text)
    location_id = Column(
        Integer, ForeignKey("locations.id"), nullable=False, index=True
    )


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True)
    title = Column(String(255))
    overview = Column(Text)
    average_votes = Column(Numeric(asdecimal=False))
    total_votes = Column(Numeric(asdecimal=False))
    image_url = Column(String(255))
    popularity = Column(Numeric(asdecimal=False))
    released_on = Column(String(255))
    location_id = Column(
        Integer, ForeignKey("locations.id"), nullable=False, index=True
    )


class Yelp(Base):
    """비즈니스 리스팅 (Yelp Fusion)"""

    __tablename__ = "yelp"

    id = Column(Integer, primary_key=True)
    name = Column(String(255))
    url = Column(Text)  # Yelp URL은 255자를 넘는 경우가 많음
    image_url = Column(String(255))
    rating = Column(Numeric(asdecimal=False))
    price = Column(String(255))
    location_id = Column(
        Integer, ForeignKey("locations.id"), nullable=False, index=True
    )
