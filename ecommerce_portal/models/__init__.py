from ecommerce_portal.models.user import User, UserType
from ecommerce_portal.models.admin import Admin
from ecommerce_portal.models.seller import Seller
from ecommerce_portal.models.shop import Shop
from ecommerce_portal.models.category import Category
from ecommerce_portal.models.product import Product
from ecommerce_portal.models.activity_log import ActivityLog
