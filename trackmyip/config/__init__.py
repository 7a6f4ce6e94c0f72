"""
Django project package for TrackMyIP.

Holds the settings module used by manage.py, the tests and any front-end
that drives the geolocation controllers.
"""
