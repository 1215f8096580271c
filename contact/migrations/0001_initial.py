import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ContactFormRateLimit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('identifier', models.CharField(help_text='Sender identifier (user id)', max_length=255, unique=True)),
                ('count', models.IntegerField(default=0, help_text='Number of submissions in the current window')),
                ('window_start', models.DateTimeField(help_text='Start of the rate limit window')),
                ('expires_at', models.DateTimeField(db_index=True, help_text='End of the rate limit window')),
                ('last_submission', models.DateTimeField(auto_now=True, help_text='Last submission time')),
            ],
            options={
                'verbose_name': 'Contact Form Rate Limit',
                'verbose_name_plural': 'Contact Form Rate Limits',
                'db_table': 'contact_form_rate_limits',
            },
        ),
        migrations.CreateModel(
            name='ContactMessage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('contact_form', models.CharField(default='personal', editable=False, help_text='Contact form the message was submitted through', max_length=32)),
                ('subject', models.CharField(help_text='Message subject', max_length=255)),
                ('message', models.TextField(help_text='Message body')),
                ('copy', models.BooleanField(default=False, help_text='Whether the sender asked for a copy')),
                ('name', models.CharField(help_text='Sender account name', max_length=150)),
                ('mail', models.EmailField(blank=True, help_text='Sender email address', max_length=254)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When the message was submitted')),
                ('recipient', models.ForeignKey(help_text='User the message is addressed to', on_delete=django.db.models.deletion.CASCADE, related_name='received_contact_messages', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Contact Message',
                'verbose_name_plural': 'Contact Messages',
                'db_table': 'contact_messages',
                'ordering': ['-created_at'],
            },
        ),
    ]
