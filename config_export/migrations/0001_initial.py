from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ConfigObject',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Configuration name, e.g. system.site', max_length=250, unique=True)),
                ('data', models.JSONField(blank=True, default=dict, help_text='Key/value contents of the configuration object')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Configuration Object',
                'verbose_name_plural': 'Configuration Objects',
                'db_table': 'config_objects',
                'ordering': ['name'],
            },
        ),
    ]
