from .events import (
    DeliveryReportRead,
    ListingCreatedIn,
    MessageCreatedIn,
    TokenResultRead,
)

__all__ = [
    "DeliveryReportRead",
    "ListingCreatedIn",
    "MessageCreatedIn",
    "TokenResultRead",
]
