from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("shops", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="NavigationItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("draft_data", models.JSONField(blank=True, null=True)),
                (
                    "published_data",
                    models.JSONField(
                        blank=True,
                        help_text="Null until the item is published as part of a tree.",
                        null=True,
                    ),
                ),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("has_unpublished_changes", models.BooleanField(default=True, editable=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "shop",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="navigation_items",
                        to="shops.shop",
                    ),
                ),
            ],
            options={
                "verbose_name": "Navigation Item",
                "verbose_name_plural": "Navigation Items",
                "ordering": ["created_at", "id"],
            },
        ),
        migrations.CreateModel(
            name="NavigationTree",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("items", models.JSONField(blank=True, default=list)),
                ("draft_items", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "shop",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="navigation_trees",
                        to="shops.shop",
                    ),
                ),
            ],
            options={
                "verbose_name": "Navigation Tree",
                "verbose_name_plural": "Navigation Trees",
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="NavigationTreeItemReference",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("is_draft", models.BooleanField()),
                (
                    "navigation_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.RESTRICT,
                        related_name="tree_references",
                        to="navigation.navigationitem",
                    ),
                ),
                (
                    "tree",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="item_references",
                        to="navigation.navigationtree",
                    ),
                ),
            ],
            options={
                "unique_together": {("tree", "navigation_item", "is_draft")},
            },
        ),
    ]
