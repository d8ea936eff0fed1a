from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SyncRecord',
            fields=[
                ('code', models.CharField(max_length=50, primary_key=True, serialize=False)),
                ('last_synced_at', models.DateTimeField(auto_now=True)),
                ('photo_size', models.IntegerField(default=0)),
                ('asset_id', models.IntegerField(default=0)),
                ('name', models.CharField(blank=True, default='', max_length=255)),
                ('price', models.FloatField(default=0.0)),
            ],
            options={
                'db_table': 'sync_status',
            },
        ),
    ]
