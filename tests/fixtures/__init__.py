from .factories import (
    T0,
    make_user,
    make_item,
    add_likes,
    auth_headers,
)
