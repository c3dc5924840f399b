import core.validators
import django.contrib.auth.models
import django.contrib.auth.validators
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('email', models.EmailField(error_messages={'unique': 'A user with that email already exists.'}, help_text='Required. Enter a valid email address.', max_length=254, unique=True, verbose_name='email address')),
                ('wallet_address', models.CharField(blank=True, help_text='Optional. Wallet address connected by the user.', max_length=100, null=True, validators=[core.validators.validate_wallet_address], verbose_name='wallet address')),
                ('profile_image', models.URLField(blank=True, help_text='Optional. URL of the profile picture.', max_length=500, null=True, verbose_name='profile image')),
                ('bio', models.TextField(blank=True, null=True, verbose_name='bio')),
                ('skills', models.JSONField(blank=True, default=list, help_text='Ordered list of skill names.', validators=[core.validators.validate_string_list], verbose_name='skills')),
                ('hourly_rate', models.DecimalField(blank=True, decimal_places=4, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'), message='Hourly rate cannot be negative.')], verbose_name='hourly rate')),
                ('success_rate', models.PositiveSmallIntegerField(default=0, help_text='Percentage of projects completed successfully.', validators=[django.core.validators.MaxValueValidator(100, message='Success rate cannot exceed 100.')], verbose_name='success rate')),
                ('completed_projects', models.PositiveIntegerField(default=0, verbose_name='completed projects')),
                ('rating', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=3, validators=[django.core.validators.MinValueValidator(Decimal('0.00'), message='Rating cannot be negative.'), django.core.validators.MaxValueValidator(Decimal('5.00'), message='Rating cannot exceed 5.00.')], verbose_name='rating')),
                ('total_reviews', models.PositiveIntegerField(default=0, verbose_name='total reviews')),
                ('is_freelancer', models.BooleanField(default=False, help_text='Indicates whether the user offers freelance services.', verbose_name='freelancer status')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['is_freelancer'], name='user_is_freelancer_idx')],
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200, verbose_name='title')),
                ('description', models.TextField(verbose_name='description')),
                ('total_budget', models.DecimalField(decimal_places=4, max_digits=10, verbose_name='total budget')),
                ('status', models.CharField(choices=[('open', 'Open'), ('in_progress', 'In Progress'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='open', max_length=20, verbose_name='status')),
                ('category', models.CharField(blank=True, max_length=100, null=True, verbose_name='category')),
                ('tags', models.JSONField(blank=True, default=list, validators=[core.validators.validate_string_list], verbose_name='tags')),
                ('deadline', models.DateTimeField(blank=True, null=True, verbose_name='deadline')),
                ('smart_contract_address', models.CharField(blank=True, max_length=100, null=True, validators=[core.validators.validate_wallet_address], verbose_name='smart contract address')),
                ('escrow_status', models.CharField(choices=[('pending', 'Pending'), ('funded', 'Funded'), ('released', 'Released')], default='pending', max_length=20, verbose_name='escrow status')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('client', models.ForeignKey(help_text='Client who posted the project', on_delete=django.db.models.deletion.PROTECT, related_name='client_projects', to=settings.AUTH_USER_MODEL)),
                ('freelancer', models.ForeignKey(blank=True, help_text='Freelancer hired for the project', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='freelancer_projects', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'project',
                'verbose_name_plural': 'projects',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['client'], name='project_client_idx'),
                    models.Index(fields=['freelancer'], name='project_freelancer_idx'),
                    models.Index(fields=['status'], name='project_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ProjectModule',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, verbose_name='name')),
                ('description', models.TextField(blank=True, null=True, verbose_name='description')),
                ('budget', models.DecimalField(decimal_places=4, max_digits=10, verbose_name='budget')),
                ('deadline', models.DateTimeField(blank=True, null=True, verbose_name='deadline')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('in_progress', 'In Progress'), ('completed', 'Completed')], default='pending', max_length=20, verbose_name='status')),
                ('priority', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High')], default='medium', max_length=10, verbose_name='priority')),
                ('progress', models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(100, message='Progress cannot exceed 100.')], verbose_name='progress')),
                ('order', models.IntegerField(help_text='Display position of the module within its project', verbose_name='order')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='modules', to='core.project')),
            ],
            options={
                'verbose_name': 'project module',
                'verbose_name_plural': 'project modules',
                'ordering': ['project', 'order'],
                'constraints': [models.UniqueConstraint(fields=('project', 'order'), name='unique_module_order_per_project')],
            },
        ),
        migrations.CreateModel(
            name='SmartContractTerms',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('terms', models.JSONField(blank=True, help_text='Free-form key/value terms document', validators=[core.validators.validate_terms_document], verbose_name='terms')),
                ('payment_schedule', models.CharField(choices=[('upon_module_completion', 'Upon module completion'), ('weekly_milestones', 'Weekly milestones'), ('50_50_split', '50% upfront, 50% completion'), ('milestone_based', 'Milestone-based payments')], max_length=50, verbose_name='payment schedule')),
                ('revision_rounds', models.PositiveSmallIntegerField(default=3, verbose_name='revision rounds')),
                ('cancellation_terms', models.TextField(blank=True, null=True, verbose_name='cancellation terms')),
                ('quality_standards', models.TextField(blank=True, null=True, verbose_name='quality standards')),
                ('dispute_resolution', models.CharField(choices=[('community_arbitration', 'Community Arbitration'), ('platform_mediation', 'Platform Mediation'), ('external_arbitrator', 'External Arbitrator'), ('direct_negotiation', 'Direct Negotiation Only')], default='community_arbitration', max_length=50, verbose_name='dispute resolution')),
                ('platform_fee', models.DecimalField(decimal_places=2, default=Decimal('2.50'), help_text='Percentage charged by the platform', max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0'), message='Platform fee cannot be negative.'), django.core.validators.MaxValueValidator(Decimal('10'), message='Platform fee cannot exceed 10%.')], verbose_name='platform fee')),
                ('gas_fee_responsibility', models.CharField(choices=[('split', 'Split between parties'), ('client_pays', 'Client pays all fees'), ('freelancer_pays', 'Freelancer pays all fees'), ('platform_covers', 'Platform covers fees')], default='split', max_length=20, verbose_name='gas fee responsibility')),
                ('auto_release_after_days', models.PositiveSmallIntegerField(default=7, validators=[django.core.validators.MinValueValidator(1, message='Auto release must be at least 1 day.'), django.core.validators.MaxValueValidator(30, message='Auto release cannot exceed 30 days.')], verbose_name='auto release after days')),
                ('is_active', models.BooleanField(default=True, verbose_name='active')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='contract_terms', to='core.project')),
            ],
            options={
                'verbose_name': 'smart contract terms',
                'verbose_name_plural': 'smart contract terms',
                'ordering': ['-created_at'],
                'constraints': [models.UniqueConstraint(condition=models.Q(('is_active', True)), fields=('project',), name='unique_active_contract_per_project', violation_error_message='This project already has active contract terms.')],
            },
        ),
        migrations.CreateModel(
            name='Proposal',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('cover_letter', models.TextField(verbose_name='cover letter')),
                ('proposed_budget', models.DecimalField(decimal_places=4, max_digits=10, verbose_name='proposed budget')),
                ('proposed_deadline', models.DateTimeField(blank=True, null=True, verbose_name='proposed deadline')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('rejected', 'Rejected')], default='pending', max_length=20, verbose_name='status')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='proposals', to='core.project')),
                ('freelancer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='proposals', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'proposal',
                'verbose_name_plural': 'proposals',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['project'], name='proposal_project_idx'),
                    models.Index(fields=['freelancer'], name='proposal_freelancer_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Message',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('content', models.TextField(verbose_name='content')),
                ('file_attachment', models.CharField(blank=True, help_text='Reference to an uploaded attachment', max_length=500, null=True, verbose_name='file attachment')),
                ('is_read', models.BooleanField(default=False, verbose_name='read')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False, verbose_name='created at')),
                ('project', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='messages', to='core.project')),
                ('sender', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sent_messages', to=settings.AUTH_USER_MODEL)),
                ('receiver', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='received_messages', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'message',
                'verbose_name_plural': 'messages',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['sender', 'receiver'], name='message_participants_idx'),
                    models.Index(fields=['receiver', 'is_read'], name='message_unread_idx'),
                    models.Index(fields=['created_at'], name='message_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Milestone',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('description', models.TextField(verbose_name='description')),
                ('amount', models.DecimalField(decimal_places=4, max_digits=10, verbose_name='amount')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed'), ('paid', 'Paid')], default='pending', max_length=20, verbose_name='status')),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='completed at')),
                ('paid_at', models.DateTimeField(blank=True, null=True, verbose_name='paid at')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='milestones', to='core.project')),
                ('module', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='milestones', to='core.projectmodule')),
            ],
            options={
                'verbose_name': 'milestone',
                'verbose_name_plural': 'milestones',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['project'], name='milestone_project_idx'),
                    models.Index(fields=['status'], name='milestone_status_idx'),
                ],
            },
        ),
    ]
