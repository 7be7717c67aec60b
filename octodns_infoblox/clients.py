#
#
#

"""Protocol definitions for appliance connectors.

This module defines structural typing (PEP 544) for the connection handle,
so the object manager can run against InfobloxClient or any fake that
provides the same methods.
"""

from typing import Dict, Iterable, List, Optional, Protocol


class Connector(Protocol):
    """Protocol defining the calls the object manager needs.

    InfobloxClient talks to WAPI over HTTPS; tests provide in-memory
    implementations.
    """

    def query(
        self,
        object_type: str,
        params: Dict[str, str],
        return_fields: Optional[Iterable[str]] = None,
    ) -> List[Dict]:
        """Search objects of one type.

        Args:
            object_type: WAPI object type, e.g. 'record:cname'
            params: Exact-match search fields
            return_fields: Fields to include in each result

        Returns:
            List of object dicts, each carrying its '_ref'
        """
        ...

    def create(
        self,
        object_type: str,
        data: Dict,
        return_fields: Optional[Iterable[str]] = None,
    ) -> Dict:
        """Create an object and return it as stored by the appliance."""
        ...

    def get(
        self, ref: str, return_fields: Optional[Iterable[str]] = None
    ) -> Dict:
        """Read a single object by reference."""
        ...

    def update(
        self,
        ref: str,
        data: Dict,
        return_fields: Optional[Iterable[str]] = None,
    ) -> Dict:
        """Modify an object and return it as stored by the appliance."""
        ...

    def delete(self, ref: str) -> str:
        """Remove an object.

        Returns:
            The reference of the removed object
        """
        ...

    def zones(self, view: str) -> List[str]:
        """List the authoritative zone FQDNs in a view."""
        ...

    def close(self) -> None:
        """Release the underlying transport."""
        ...
