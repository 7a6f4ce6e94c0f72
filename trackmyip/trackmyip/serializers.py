"""
Serializers for TrackMyIP records
"""
from rest_framework import serializers
from .models import GeolocationRecord


class GeolocationRecordSerializer(serializers.ModelSerializer):
    """
    Serializer for GeolocationRecord.
    Renders records as JSON and validates user edits.
    """
    latitude = serializers.FloatField(min_value=-90.0, max_value=90.0, required=False)
    longitude = serializers.FloatField(min_value=-180.0, max_value=180.0, required=False)

    class Meta:
        model = GeolocationRecord
        fields = [
            'id',
            'ip',
            'country',
            'region',
            'city',
            'latitude',
            'longitude'
        ]
        read_only_fields = ['id']

    def validate_ip(self, value):
        """
        The IP field also accepts hostnames, so only reject blank values.
        """
        value = value.strip()
        if not value:
            raise serializers.ValidationError("IP address / URL must not be empty")
        return value

    def apply_to(self, record):
        """
        Return a detached copy of `record` with the validated edits applied.

        The copy keeps the record's id, so it can be selected on a
        GeolocationController and saved with update_selected().
        """
        edited = GeolocationRecord(pk=record.pk, **record.field_values())
        for field, value in self.validated_data.items():
            setattr(edited, field, value)
        return edited
