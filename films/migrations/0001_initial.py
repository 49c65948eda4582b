import django.core.validators
from django.db import migrations, models
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Film',
            fields=[
                ('film_id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('imdb_id', models.CharField(max_length=20, unique=True, validators=[django.core.validators.RegexValidator('^tt\\d{7,}\\Z', 'Invalid IMDb ID format')])),
                ('title', models.CharField(db_index=True, max_length=500)),
                ('year', models.CharField(blank=True, max_length=10)),
                ('poster', models.TextField(blank=True)),
                ('plot', models.TextField(blank=True)),
                ('director', models.CharField(blank=True, max_length=500)),
                ('actors', models.TextField(blank=True, help_text='Comma separated list of main cast members')),
                ('genre', models.CharField(blank=True, help_text='Comma separated list of genres', max_length=500)),
                ('runtime', models.CharField(blank=True, max_length=50)),
                ('imdb_rating', models.CharField(blank=True, max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
        ),
    ]
