"""Runtime-updatable settings backed by the AppSetting table."""
import logging

from django.conf import settings

from .models import AppSetting

logger = logging.getLogger(__name__)


class ApiKeyStore:
    """
    Read and write the ipstack API key.

    A value saved here wins over settings.IPSTACK_API_KEY. Saving an empty
    value removes the override so the configured default applies again.
    """
    KEY_API_KEY = 'ipstack_api_key'

    def get_api_key(self) -> str:
        override = (
            AppSetting.objects
            .filter(key=self.KEY_API_KEY)
            .values_list('value', flat=True)
            .first()
        )
        if override:
            return override
        return getattr(settings, 'IPSTACK_API_KEY', '') or ''

    def set_api_key(self, val: str):
        val = (val or '').strip()
        if not val:
            deleted, _ = AppSetting.objects.filter(key=self.KEY_API_KEY).delete()
            if deleted:
                logger.info("Removed stored API key, falling back to configured default")
            return
        AppSetting.objects.update_or_create(
            key=self.KEY_API_KEY,
            defaults={'value': val},
        )
        logger.info("Stored new API key")
