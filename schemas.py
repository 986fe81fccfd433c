"""
Database Schemas for Tastify

Each Pydantic model represents a MongoDB collection (collection name is the lowercase of the class name).
References to other documents are stored as 24-character id strings.

This app manages:
- Guests (loyalty bonus, login) and Staff (position, salary, login)
- Restaurants, their menu items, tables and warehouse products
- Orders with their line items, table bookings and staff schedules
"""

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from auth import PASSWORD_MAX_BYTES
from database import to_utc

ObjectIdStr = Annotated[str, Field(pattern=r"^[0-9a-fA-F]{24}$", description="24-character document id")]
Phone = Annotated[str, Field(pattern=r"^[0-9]{12}$", description="Mobile number, exactly 12 digits")]
Login = Annotated[str, Field(pattern=r"^[a-zA-Z0-9]{3,20}$", description="3-20 letters or digits")]
# bcrypt rejects anything over 72 bytes, checked in _check_password
Password = Annotated[str, Field(min_length=8, max_length=72)]

MENU_FIRST_DISHES = "first dishes"
MENU_SECOND_DISHES = "second dishes"
MENU_DRINK = "drink"


def _check_password(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not any(c.isdigit() for c in value):
        raise ValueError("Password must contain at least one numeric digit")
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")
    return value


# Guests

class Guest(BaseModel):
    """
    Restaurant guests with a loyalty balance
    Collection name: "guest"
    """
    name: str = Field(..., min_length=1, max_length=50, description="Guest name")
    phone: Optional[Phone] = None
    email: Optional[EmailStr] = None
    login: Login
    password: str = Field(..., description="bcrypt hash")
    bonus: int = Field(0, ge=0, description="Loyalty bonus points")


class GuestRegistration(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    phone: Phone
    email: EmailStr
    login: Login
    password: Password

    password_has_digit = field_validator("password")(_check_password)


class GuestUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    phone: Optional[Phone] = None
    email: Optional[EmailStr] = None
    login: Login
    bonus: int = Field(0, ge=0, description="Bonus must be a positive number")
    password: Optional[Password] = Field(None, description="New password, keeps the current one when omitted")

    password_has_digit = field_validator("password")(_check_password)


class GuestOut(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    login: str
    bonus: int


class LoginRequest(BaseModel):
    login: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str


class Coupon(BaseModel):
    discount: int = Field(..., ge=0, description="Discount granted")
    bonus: int = Field(..., ge=0, description="Bonus points remaining")


# Staff

class Staff(BaseModel):
    """
    Restaurant employees
    Collection name: "staff"
    """
    name: str = Field(..., min_length=1, max_length=100)
    position: str = Field(..., min_length=1, max_length=100, description="administrator grants the admin role")
    hourly_salary: float = Field(..., gt=0)
    phone: Phone
    attendance_card: Optional[int] = Field(None, ge=1)
    login: Login
    password: str = Field(..., description="bcrypt hash")
    restaurant_id: ObjectIdStr


class StaffRegistration(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    position: str = Field(..., min_length=1, max_length=100)
    hourly_salary: float = Field(..., gt=0)
    phone: Phone
    attendance_card: Optional[int] = Field(None, ge=1)
    login: Login
    password: Password
    restaurant_id: ObjectIdStr

    password_has_digit = field_validator("password")(_check_password)


class StaffUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    position: str = Field(..., min_length=1, max_length=100)
    hourly_salary: float = Field(..., gt=0)
    phone: Phone
    attendance_card: Optional[int] = Field(None, ge=1)
    login: Login
    password: Optional[Password] = None
    restaurant_id: ObjectIdStr

    password_has_digit = field_validator("password")(_check_password)


class StaffOut(BaseModel):
    id: str
    name: str
    position: str
    hourly_salary: float
    phone: str
    attendance_card: Optional[int] = None
    login: str
    restaurant_id: str


class StaffReport(BaseModel):
    name: str
    total_working_hours: float = Field(..., ge=0)


# Restaurants and menu

class Restaurant(BaseModel):
    """
    Restaurants of the chain
    Collection name: "restaurant"
    """
    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., pattern=r"^[a-zA-Zа-яА-ЯёЁіІїЇєЄ0-9\s,.'-]+$", description="Street address")
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    info: Optional[str] = Field(None, max_length=200)
    cuisine: List[str] = Field(..., min_length=1, description="At least one cuisine")


class RestaurantOut(Restaurant):
    id: str


class Menuitem(BaseModel):
    """
    Dishes and drinks offered by a restaurant
    Collection name: "menuitem"
    """
    restaurant_id: ObjectIdStr
    name: str = Field(..., min_length=1, max_length=100, description="Dish name")
    size: int = Field(..., ge=1, description="Portion size")
    price: Optional[int] = Field(None, ge=1, description="Unit price")
    info: Optional[str] = Field(None, max_length=200)
    type: str = Field(..., description="first dishes | second dishes | drink")


class MenuitemOut(Menuitem):
    id: str


class DishPopularity(BaseModel):
    name: str
    orders_count: int = Field(..., ge=0)


# Orders

class Order(BaseModel):
    """
    Orders placed at a table
    Collection name: "order"
    """
    number: Optional[int] = None
    table_id: ObjectIdStr
    date_time: datetime
    comment: Optional[str] = Field(None, max_length=500)
    status: str = Field(..., min_length=1)

    normalize_utc = field_validator("date_time")(to_utc)


class OrderOut(Order):
    id: str


class OrderitemCreate(BaseModel):
    menu_id: ObjectIdStr
    amount: int = Field(1, ge=1, description="Quantity ordered")


class Orderitem(OrderitemCreate):
    """
    One menu item within an order
    Collection name: "orderitem"
    """
    order_id: ObjectIdStr


class OrderitemOut(Orderitem):
    id: str


# Bookings, tables, schedules, products

class Booking(BaseModel):
    """
    Table reservations made by guests
    Collection name: "booking"
    """
    table_id: ObjectIdStr
    guest_id: ObjectIdStr
    date_time: datetime
    persons_count: int = Field(..., ge=1)
    comment: Optional[str] = Field(None, max_length=500)

    normalize_utc = field_validator("date_time")(to_utc)


class BookingOut(Booking):
    id: str


class Table(BaseModel):
    """
    Collection name: "table"
    """
    number: int = Field(..., ge=1)
    status: str = Field(..., min_length=1)


class TableOut(Table):
    id: str


class Schedule(BaseModel):
    """
    A staff member's shift
    Collection name: "schedule"
    """
    staff_id: ObjectIdStr
    start_date_time: datetime
    finish_date_time: datetime

    normalize_utc = field_validator("start_date_time", "finish_date_time")(to_utc)

    @model_validator(mode="after")
    def _finish_after_start(self):
        if self.start_date_time >= self.finish_date_time:
            raise ValueError("finish_date_time must be greater than start_date_time")
        return self


class ScheduleOut(Schedule):
    id: str


class Product(BaseModel):
    """
    Warehouse stock
    Collection name: "product"
    """
    name: str = Field(..., min_length=1, max_length=150)
    amount: float = Field(..., gt=0)


class ProductOut(Product):
    id: str
