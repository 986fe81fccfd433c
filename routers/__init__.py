from routers import booking, guest, menu, order, product, restaurant, schedule, staff, table

all_routers = [
    guest.router,
    staff.router,
    restaurant.router,
    menu.router,
    order.router,
    booking.router,
    table.router,
    schedule.router,
    product.router,
]
