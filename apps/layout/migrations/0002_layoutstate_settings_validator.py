import apps.layout.models
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("layout", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="layoutstate",
            name="settings",
            field=models.JSONField(default=dict, validators=[apps.layout.models.validate_settings_object]),
        ),
    ]
