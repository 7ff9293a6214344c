"""Resource-specific convenience wrappers."""
from .activation_keys import ActivationKeysResource
from .admin import AdminResource
from .cdn import CdnResource
from .consumer_types import ConsumerTypesResource
from .consumers import ConsumersResource
from .content import ContentResource
from .distributor_versions import DistributorVersionsResource
from .entitlements import EntitlementsResource
from .environments import EnvironmentsResource
from .jobs import JobsResource
from .owners import OwnersResource
from .pools import PoolsResource
from .products import ProductsResource
from .roles import RolesResource
from .status import StatusResource
from .subscriptions import SubscriptionsResource
from .users import UsersResource

__all__ = [
    "ActivationKeysResource",
    "AdminResource",
    "CdnResource",
    "ConsumerTypesResource",
    "ConsumersResource",
    "ContentResource",
    "DistributorVersionsResource",
    "EntitlementsResource",
    "EnvironmentsResource",
    "JobsResource",
    "OwnersResource",
    "PoolsResource",
    "ProductsResource",
    "RolesResource",
    "StatusResource",
    "SubscriptionsResource",
    "UsersResource",
]
