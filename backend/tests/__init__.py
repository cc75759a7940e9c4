# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from shop_api.models.order import Order  # noqa: F401
from shop_api.models.product import Product  # noqa: F401
from shop_api.models.user import User  # noqa: F401
