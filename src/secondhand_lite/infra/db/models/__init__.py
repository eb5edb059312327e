from secondhand_lite.infra.db.models.base import Base
from secondhand_lite.infra.db.models.category import CategoryRow
from secondhand_lite.infra.db.models.listing import ListingRow
from secondhand_lite.infra.db.models.profile import ProfileRow

__all__ = ["Base", "CategoryRow", "ListingRow", "ProfileRow"]
