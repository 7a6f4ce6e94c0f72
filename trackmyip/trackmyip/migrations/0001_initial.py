from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='AppSetting',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(help_text='Setting name (e.g., ipstack_api_key)', max_length=100, unique=True)),
                ('value', models.TextField(blank=True, help_text='Setting value')),
            ],
            options={
                'db_table': 'app_settings',
                'ordering': ['key'],
            },
        ),
        migrations.CreateModel(
            name='GeolocationRecord',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('ip', models.CharField(help_text='IP address or hostname that was looked up', max_length=255)),
                ('country', models.CharField(blank=True, default='', help_text='Country name (e.g., United States)', max_length=255)),
                ('region', models.CharField(blank=True, default='', help_text='Region or state name', max_length=255)),
                ('city', models.CharField(blank=True, default='', help_text='City name', max_length=255)),
                ('latitude', models.FloatField(default=0.0, help_text='Latitude of the location')),
                ('longitude', models.FloatField(default=0.0, help_text='Longitude of the location')),
            ],
            options={
                'db_table': 'geolocations',
                'ordering': ['id'],
            },
        ),
    ]
