# backend/services/legacy.py
"""
Upgrades for documents written before ipDetails and bridgeDetails became
structured sub-documents. Older records hold both as free text; every read
and write through the record store passes the body through
``upgrade_document`` so callers only ever see the structured shape.
"""

import re
import logging

logger = logging.getLogger(__name__)

IP_DETAIL_KEYS = ('gateway', 'networkIp', 'startIp', 'lastIp', 'subnetMask')
BRIDGE_SIDE_KEYS = ('bridgeIp', 'frequency', 'ssid', 'wpa2PreSharedKey', 'peakRssi', 'channelBandwidth')

_SEPARATORS = re.compile(r'\n|;|\|')
_KEY_VALUE = re.compile(r'[:=]')


def _ip_key_for(label):
    """Map a free-text label onto one of the IP detail keys."""
    if 'gate' in label:
        return 'gateway'
    if 'network' in label:
        return 'networkIp'
    if 'start' in label:
        return 'startIp'
    if 'last' in label or 'end' in label:
        return 'lastIp'
    if 'mask' in label or 'subnet' in label:
        return 'subnetMask'
    return None


def parse_ip_details(value):
    """
    Resolve an ipDetails value into the five structured keys.

    Dicts are normalized (missing or null keys become empty strings).
    Strings such as ``"Gateway: 10.0.0.1; Subnet Mask = 255.255.255.0"`` are
    split on newlines, ``;``, ``|`` or ``,`` and each ``label: value`` or
    ``label = value`` part is matched to a key by its label. Parts with no
    recognizable label or no value are skipped.

    Args:
        value (dict | str | None): Stored or submitted ipDetails

    Returns:
        dict: {gateway, networkIp, startIp, lastIp, subnetMask}
    """
    result = {key: '' for key in IP_DETAIL_KEYS}
    if not value:
        return result

    if isinstance(value, dict):
        for key in IP_DETAIL_KEYS:
            result[key] = value.get(key) or ''
        return result

    normalized = _SEPARATORS.sub(',', str(value)).lower()
    parts = [part.strip() for part in normalized.split(',') if part.strip()]
    for part in parts:
        pieces = [piece.strip() for piece in _KEY_VALUE.split(part, maxsplit=1)]
        if len(pieces) < 2 or not pieces[0] or not pieces[1]:
            continue
        key = _ip_key_for(pieces[0])
        if key:
            result[key] = pieces[1]

    return result


def upgrade_bridge_details(value):
    """
    Resolve a bridgeDetails value into the structured two-sided shape.

    Legacy text has no reliable per-side layout, so it is kept verbatim under
    ``notes`` alongside empty sides.
    """
    if isinstance(value, str):
        upgraded = {
            'stpi': {key: '' for key in BRIDGE_SIDE_KEYS},
            'customer': {key: '' for key in BRIDGE_SIDE_KEYS},
        }
        if value.strip():
            upgraded['notes'] = value
        return upgraded
    return value


def upgrade_document(data):
    """Return a copy of ``data`` with legacy flat-string fields made structured."""
    if not isinstance(data, dict):
        return data

    upgraded = dict(data)
    if isinstance(upgraded.get('ipDetails'), str):
        logger.debug("Upgrading legacy ipDetails string")
        upgraded['ipDetails'] = parse_ip_details(upgraded['ipDetails'])
    if isinstance(upgraded.get('bridgeDetails'), str):
        logger.debug("Upgrading legacy bridgeDetails string")
        upgraded['bridgeDetails'] = upgrade_bridge_details(upgraded['bridgeDetails'])
    return upgraded
