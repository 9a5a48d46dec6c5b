from orient.models.user import User, USER_ROLES
from orient.models.category import Category
from orient.models.vendor import Vendor, VENDOR_STATUSES
from orient.models.product import Product, PRODUCT_STATUSES
from orient.models.analytics import ProductView, ContactClick
from orient.models.listing import Listing, LISTING_ROLES
from orient.models.crop_info import CropInfo
from orient.models.forum import Question, Answer

__all__ = [
    "User",
    "USER_ROLES",
    "Category",
    "Vendor",
    "VENDOR_STATUSES",
    "Product",
    "PRODUCT_STATUSES",
    "ProductView",
    "ContactClick",
    "Listing",
    "LISTING_ROLES",
    "CropInfo",
    "Question",
    "Answer",
]
