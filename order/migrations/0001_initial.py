import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Log",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("uid", models.BigIntegerField(default=0)),
                ("op_time", models.DateTimeField(default=django.utils.timezone.now)),
                ("detail", models.CharField(max_length=255)),
            ],
            options={
                "db_table": "order_logs",
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sn", models.CharField(max_length=64, unique=True)),
                ("buyer_id", models.BigIntegerField(db_index=True)),
                ("payment_id", models.BigIntegerField(default=0)),
                ("payment_sn", models.CharField(default="", max_length=64)),
                ("original_total_price", models.BigIntegerField(default=0)),
                ("real_total_price", models.BigIntegerField(default=0)),
                ("status", models.IntegerField(
                    choices=[(1, "未支付"), (2, "已完成"), (3, "已取消"), (4, "已超时")], default=1)),
                ("request_id", models.CharField(max_length=64, null=True, unique=True)),
                ("ctime", models.DateTimeField(default=django.utils.timezone.now)),
                ("utime", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "order_orders",
                "indexes": [models.Index(fields=["status", "ctime"], name="order_status_ctime_idx")],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("spu_id", models.BigIntegerField()),
                ("sku_id", models.BigIntegerField()),
                ("sku_name", models.CharField(max_length=255)),
                ("sku_description", models.CharField(default="", max_length=1024)),
                ("sku_original_price", models.BigIntegerField()),
                ("sku_real_price", models.BigIntegerField()),
                ("quantity", models.IntegerField()),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="items",
                                            to="order.order")),
            ],
            options={
                "db_table": "order_order_items",
            },
        ),
    ]
