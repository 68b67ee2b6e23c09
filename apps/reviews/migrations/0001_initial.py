import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('bookings', '0001_initial'),
        ('properties', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Review',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                (
                    'rating',
                    models.PositiveSmallIntegerField(
                        help_text='Оценка от 1 до 5',
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                    ),
                ),
                ('comment', models.TextField(blank=True, max_length=2000)),
                ('review_date', models.DateTimeField(default=django.utils.timezone.now)),
                (
                    'booking',
                    models.OneToOneField(
                        help_text='Бронирование, к которому относится отзыв',
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='review',
                        to='bookings.booking',
                    ),
                ),
                (
                    'property',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='reviews',
                        to='properties.property',
                    ),
                ),
                (
                    'user',
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name='reviews',
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                'ordering': ['-review_date', '-id'],
                'indexes': [
                    models.Index(fields=['property', '-review_date'], name='review_property_date_idx'),
                    models.Index(fields=['user'], name='review_user_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(('rating__gte', 1), ('rating__lte', 5)),
                        name='review_rating_range',
                    )
                ],
            },
        ),
    ]
