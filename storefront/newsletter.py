"""Newsletter subscription flag, remembered across sessions."""
from typing import Optional

from storefront.errors import InvalidEmailError, ERROR_INVALID_EMAIL
from storefront.logging import get_logger, mask_email_for_logging
from storefront.storage import KeyValueStore, StorageKeys, get_default_store
from storefront.utils.validators import is_valid_email

logger = get_logger(__name__)

SUBSCRIBED_VALUE = "true"


class NewsletterState:
    """
    Tracks whether this visitor already subscribed, so the signup popup is
    not shown again. The flag is read once, when the state is created.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._is_subscribed = self._read_flag()

    def _read_flag(self) -> bool:
        try:
            return self.store.get(StorageKeys.NEWSLETTER) == SUBSCRIBED_VALUE
        except Exception as e:
            logger.warning(f"Could not read newsletter flag: {e}")
            return False

    @property
    def is_subscribed(self) -> bool:
        return self._is_subscribed

    def subscribe(self, email: str) -> bool:
        """
        Mark the visitor as subscribed.

        An empty email is ignored and returns False.

        Raises:
            InvalidEmailError: email is not a plausible address
        """
        if not email:
            return False
        if not is_valid_email(email):
            raise InvalidEmailError(ERROR_INVALID_EMAIL)

        self.store.set(StorageKeys.NEWSLETTER, SUBSCRIBED_VALUE)
        self._is_subscribed = True
        logger.info(f"Newsletter subscription recorded for {mask_email_for_logging(email)}")
        return True


def create_newsletter_state(store: Optional[KeyValueStore] = None) -> NewsletterState:
    return NewsletterState(store if store is not None else get_default_store())
