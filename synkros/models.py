from django.db import models


class SyncRecord(models.Model):
    code = models.CharField(max_length=50, primary_key=True)
    last_synced_at = models.DateTimeField(auto_now=True)
    photo_size = models.IntegerField(default=0)
    asset_id = models.IntegerField(default=0)
    name = models.CharField(max_length=255, blank=True, default='')
    price = models.FloatField(default=0.0)

    class Meta:
        db_table = 'sync_status'

    def __str__(self):
        return f"{self.code} (asset={self.asset_id}, size={self.photo_size})"
