from storerate.schemas.auth import RegisterRequest, LoginRequest, ChangePasswordRequest, AuthResponse, MessageOut
from storerate.schemas.user import UserOut, UserCreate, UserListItem, UserListOut, UserDetailOut
from storerate.schemas.store import StoreCreate, StoreOut, AdminStoreItem, UserStoreItem
from storerate.schemas.rating import RatingCreate, RatingUpdate, RatingOut, StoreRatingItem
from storerate.schemas.dashboard import AdminDashboardOut, ActivityOut, RecentActivityOut, StoreOwnerDashboardOut
