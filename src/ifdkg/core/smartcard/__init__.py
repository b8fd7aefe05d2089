from ifdkg.core.smartcard.card import Card
from ifdkg.core.smartcard.logging import PROTOCOL, TRACE
from ifdkg.core.smartcard.types import APDU, Response

__all__ = ["APDU", "Card", "PROTOCOL", "Response", "TRACE"]
