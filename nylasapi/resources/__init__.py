from nylasapi.generator import Resource
from nylasapi.resources.connector_credentials import (
    ConnectorCredential,
    ConnectorCredentials,
)
from nylasapi.resources.management_accounts import (
    ManagementAccount,
    ManagementAccounts,
)
from nylasapi.resources.messages import Message, Messages

__all__ = [
    'RESOURCES',
    'ConnectorCredential',
    'ConnectorCredentials',
    'ManagementAccount',
    'ManagementAccounts',
    'Message',
    'Messages',
]

# Descriptor-based resources by path, as used by the command line.
RESOURCES: dict[str, type[Resource]] = {
    resource.descriptor.path: resource for resource in (Messages, ManagementAccounts)
}
