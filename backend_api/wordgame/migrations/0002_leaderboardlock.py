from django.db import migrations, models


def create_guard_row(apps, schema_editor):
    LeaderboardLock = apps.get_model("wordgame", "LeaderboardLock")
    LeaderboardLock.objects.get_or_create(pk=1)


class Migration(migrations.Migration):

    dependencies = [
        ("wordgame", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="LeaderboardLock",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
            ],
            options={
                "verbose_name": "Leaderboard lock",
            },
        ),
        migrations.RunPython(create_guard_row, migrations.RunPython.noop),
    ]
