"""Restaurant endpoints."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from restaurant_api.api.deps import get_current_user
from restaurant_api.db.session import get_db
from restaurant_api.models.user import User
from restaurant_api.schemas.restaurant import RestaurantCreate, RestaurantRead, RestaurantUpdate
from restaurant_api.services import restaurant_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[RestaurantRead])
def list_restaurants(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[RestaurantRead]:
    restaurants = restaurant_service.list_restaurants(db, skip=skip, limit=limit)
    return [RestaurantRead.model_validate(item) for item in restaurants]


@router.get("/{restaurant_id}", response_model=RestaurantRead)
def get_restaurant(restaurant_id: int, db: Session = Depends(get_db)) -> RestaurantRead:
    return RestaurantRead.model_validate(restaurant_service.get_restaurant(db, restaurant_id))


@router.post(
    "",
    response_model=RestaurantRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user)],
)
def create_restaurant(payload: RestaurantCreate, db: Session = Depends(get_db)) -> RestaurantRead:
    """Create a restaurant with its address; street and email must be unused."""
    restaurant = restaurant_service.create_restaurant(db, payload)
    return RestaurantRead.model_validate(restaurant)


@router.patch("/{restaurant_id}", response_model=RestaurantRead)
def update_restaurant(
    restaurant_id: int,
    payload: RestaurantUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RestaurantRead:
    restaurant = restaurant_service.update_restaurant(db, current_user, restaurant_id, payload)
    return RestaurantRead.model_validate(restaurant)


@router.delete("/{restaurant_id}", response_model=RestaurantRead)
def delete_restaurant(
    restaurant_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> RestaurantRead:
    return restaurant_service.delete_restaurant(db, current_user, restaurant_id)
