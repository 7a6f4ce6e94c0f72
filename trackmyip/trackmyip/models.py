from django.db import models


class GeolocationRecord(models.Model):
    """
    One geolocation lookup result tied to the queried address.

    Fields:
    - ip: The IP address or hostname that was looked up
    - country: Country name reported by the geolocation API
    - region: Region or state name
    - city: City name
    - latitude / longitude: Coordinates of the location

    The store does not enforce unique IPs. Duplicates are rejected by
    GeolocationController against its in-memory list.
    """
    ip = models.CharField(
        max_length=255,
        help_text="IP address or hostname that was looked up"
    )
    country = models.CharField(
        max_length=255,
        blank=True,
        default='',
        help_text="Country name (e.g., United States)"
    )
    region = models.CharField(
        max_length=255,
        blank=True,
        default='',
        help_text="Region or state name"
    )
    city = models.CharField(
        max_length=255,
        blank=True,
        default='',
        help_text="City name"
    )
    latitude = models.FloatField(
        default=0.0,
        help_text="Latitude of the location"
    )
    longitude = models.FloatField(
        default=0.0,
        help_text="Longitude of the location"
    )

    # Every field a user may edit; the primary key is never copied
    EDITABLE_FIELDS = ('ip', 'country', 'region', 'city', 'latitude', 'longitude')

    class Meta:
        db_table = 'geolocations'
        ordering = ['id']  # Store insertion order

    def __str__(self):
        place = ', '.join(part for part in (self.city, self.country) if part)
        return f"{self.ip} ({place})" if place else self.ip

    def copy_from(self, other):
        """Overwrite every field except the primary key with values from `other`."""
        for field in self.EDITABLE_FIELDS:
            setattr(self, field, getattr(other, field))

    def field_values(self):
        return {field: getattr(self, field) for field in self.EDITABLE_FIELDS}

    def as_map_url(self):
        """OpenStreetMap link centred on the record's coordinates."""
        return (
            'https://www.openstreetmap.org/'
            f'?mlat={self.latitude}&mlon={self.longitude}'
            f'#map=12/{self.latitude}/{self.longitude}'
        )


class AppSetting(models.Model):
    """
    Runtime settings that override values from config.settings.

    Used for the ipstack API key, which users can change while the
    application is running.
    """
    key = models.CharField(
        max_length=100,
        unique=True,
        help_text="Setting name (e.g., ipstack_api_key)"
    )
    value = models.TextField(
        blank=True,
        help_text="Setting value"
    )

    class Meta:
        db_table = 'app_settings'
        ordering = ['key']

    def __str__(self):
        return self.key
