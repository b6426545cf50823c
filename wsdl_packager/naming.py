"""Name derivation for definition documents and packages."""

from wsdl_packager.domain.constants import NAMESPACE_SEGMENT_RE, PACKAGE_NAME_SEPARATOR


def derive_name(location: str | None) -> str | None:
    """Derive a short document name from its source location.

    Strips everything up to the last ``/``, a trailing ``?query`` and the
    last ``.extension``::

        >>> derive_name('http://example.com/Service.asmx?wsdl')
        'Service'
    """
    if not location:
        return None
    name = location
    if '/' in name:
        name = name[name.rfind('/') + 1:]
    if '?' in name:
        name = name[:name.rfind('?')]
    if '.' in name:
        name = name[:name.rfind('.')]
    return name


def derive_aggregate_name(namespace_uri: str | None) -> str | None:
    """Derive a package name from a namespace URI or location.

    The scheme and query are dropped, the rest is split on ``/ \\ . : ;``
    and every segment but the last is joined with ``_``::

        >>> derive_aggregate_name('http://tempuri.org/orders/Service.asmx')
        'tempuri_org_orders_Service'
    """
    if not namespace_uri:
        return None
    value = namespace_uri
    if '://' in value:
        value = value[value.index('://') + 3:]
    if '?' in value:
        value = value[:value.index('?')]
    segments = NAMESPACE_SEGMENT_RE.split(value)
    if len(segments) > 1:
        segments = segments[:-1]
    return PACKAGE_NAME_SEPARATOR.join(segments)


def join_package_names(names: list[str]) -> str:
    """Aggregate name for a set of already computed package names."""
    return PACKAGE_NAME_SEPARATOR.join(names)
