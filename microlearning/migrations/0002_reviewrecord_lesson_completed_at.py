from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("microlearning", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="reviewrecord",
            name="lesson_completed_at",
            field=models.DateTimeField(blank=True, null=True),
        ),
    ]
