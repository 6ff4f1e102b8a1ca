import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import infrastructure.persistence.models.users
import simple_history.models
import uuid
from django.conf import settings
from django.db import migrations, models


HISTORY_TYPE_CHOICES = [('+', 'Created'), ('~', 'Changed'), ('-', 'Deleted')]

KIT_TYPE_CHOICES = [('LAUNCH', 'Launch kit'), ('GROWTH', 'Growth kit')]

TASK_TYPE_CHOICES = [
    ('UPLOAD_FILE', 'Upload file'),
    ('SEND_INFO', 'Send info'),
    ('PROVIDE_DETAILS', 'Provide details'),
    ('REVIEW', 'Review'),
    ('OTHER', 'Other'),
]

TASK_STATUS_CHOICES = [
    ('PENDING', 'Pending'),
    ('IN_PROGRESS', 'In progress'),
    ('COMPLETED', 'Completed'),
    ('CANCELLED', 'Cancelled'),
]


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
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('email', models.EmailField(max_length=254, unique=True, verbose_name='Email')),
                ('name', models.CharField(blank=True, max_length=200, verbose_name='Name')),
                ('role', models.CharField(choices=[('admin', 'Admin'), ('super_admin', 'Super admin')], default='admin', max_length=30, verbose_name='Role')),
                ('otp_code', models.CharField(blank=True, max_length=12, null=True, verbose_name='OTP code')),
                ('otp_expires_at', models.DateTimeField(blank=True, null=True, verbose_name='OTP expires at')),
                ('last_activity', models.DateTimeField(blank=True, null=True, verbose_name='Last activity')),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'Admin',
                'verbose_name_plural': 'Admins',
                'db_table': 'admins',
                'ordering': ['email'],
            },
            managers=[
                ('objects', infrastructure.persistence.models.users.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='OnboardingAnswer',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('user_id', models.CharField(blank=True, db_index=True, max_length=100, verbose_name='Client account ID')),
                ('answers', models.JSONField(blank=True, default=dict, verbose_name='Answers')),
                ('completed_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Completed at')),
            ],
            options={
                'verbose_name': 'Onboarding answer',
                'verbose_name_plural': 'Onboarding answers',
                'db_table': 'onboarding_answers',
                'ordering': ['-completed_at'],
            },
        ),
        migrations.CreateModel(
            name='QuizSubmission',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='First name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='Last name')),
                ('email', models.EmailField(db_index=True, max_length=254, verbose_name='Email')),
                ('phone_number', models.CharField(blank=True, max_length=50, verbose_name='Phone number')),
                ('referral', models.CharField(blank=True, max_length=200, verbose_name='Referral')),
                ('brand_name', models.CharField(blank=True, max_length=200, verbose_name='Brand name')),
                ('logo_status', models.CharField(blank=True, max_length=100, verbose_name='Logo status')),
                ('brand_goals', models.JSONField(blank=True, default=list, verbose_name='Brand goals')),
                ('online_presence', models.CharField(blank=True, max_length=200, verbose_name='Online presence')),
                ('audience', models.JSONField(blank=True, default=list, verbose_name='Audience')),
                ('brand_style', models.CharField(blank=True, max_length=200, verbose_name='Brand style')),
                ('timeline', models.CharField(blank=True, max_length=100, verbose_name='Timeline')),
                ('preferred_kit', models.CharField(blank=True, choices=KIT_TYPE_CHOICES, max_length=20, null=True, verbose_name='Preferred kit')),
            ],
            options={
                'verbose_name': 'Quiz submission',
                'verbose_name_plural': 'Quiz submissions',
                'db_table': 'quiz_submissions',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Lead',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('business_name', models.CharField(max_length=200, verbose_name='Business name')),
                ('location', models.CharField(blank=True, max_length=200, verbose_name='Location')),
                ('primary_issue', models.TextField(blank=True, verbose_name='Primary issue')),
                ('monthly_revenue', models.CharField(blank=True, max_length=100, verbose_name='Monthly revenue')),
                ('lead_source', models.CharField(blank=True, max_length=100, verbose_name='Lead source')),
                ('client_value', models.CharField(blank=True, max_length=100, verbose_name='Client value')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='First name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='Last name')),
                ('role', models.CharField(blank=True, max_length=100, verbose_name='Role')),
                ('whatsapp', models.CharField(blank=True, max_length=50, verbose_name='WhatsApp')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='Email')),
                ('website', models.CharField(blank=True, max_length=300, verbose_name='Website')),
                ('instagram', models.CharField(blank=True, max_length=200, verbose_name='Instagram')),
            ],
            options={
                'verbose_name': 'Lead',
                'verbose_name_plural': 'Leads',
                'db_table': 'leads',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Project',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('deleted_at', models.DateTimeField(blank=True, null=True, verbose_name='Deleted at')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='Version')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name='ID')),
                ('user_id', models.CharField(blank=True, db_index=True, max_length=100, verbose_name='Client account ID')),
                ('name', models.CharField(blank=True, max_length=200, verbose_name='Client name')),
                ('email', models.EmailField(db_index=True, max_length=254, verbose_name='Client email')),
                ('kit_type', models.CharField(choices=KIT_TYPE_CHOICES, db_index=True, default='LAUNCH', max_length=20, verbose_name='Kit type')),
                ('phases_state', models.JSONField(blank=True, default=dict, verbose_name='Phase state')),
                ('started_at', models.DateTimeField(blank=True, null=True, verbose_name='Started at')),
                ('current_day_of_14', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(14)], verbose_name='Current day of 14')),
                ('next_from_us', models.TextField(blank=True, verbose_name='Next step from us')),
                ('next_from_you', models.TextField(blank=True, verbose_name='Next step from client')),
                ('onboarding_percent', models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(100)], verbose_name='Onboarding completion, %')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='project_created', to=settings.AUTH_USER_MODEL, verbose_name='Created by')),
                ('deleted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='project_deleted', to=settings.AUTH_USER_MODEL, verbose_name='Deleted by')),
                ('onboarding_answer', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='project', to='persistence.onboardinganswer', verbose_name='Onboarding answer')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='project_updated', to=settings.AUTH_USER_MODEL, verbose_name='Updated by')),
            ],
            options={
                'verbose_name': 'Project',
                'verbose_name_plural': 'Projects',
                'db_table': 'projects',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Task',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('deleted_at', models.DateTimeField(blank=True, null=True, verbose_name='Deleted at')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='Version')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=300, verbose_name='Title')),
                ('description', models.TextField(blank=True, null=True, verbose_name='Description')),
                ('type', models.CharField(choices=TASK_TYPE_CHOICES, db_index=True, default='OTHER', max_length=30, verbose_name='Type')),
                ('status', models.CharField(choices=TASK_STATUS_CHOICES, db_index=True, default='PENDING', max_length=30, verbose_name='Status')),
                ('due_date', models.DateTimeField(blank=True, null=True, verbose_name='Due date')),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='Completed at')),
                ('attachments', models.JSONField(blank=True, default=list, verbose_name='Attachments')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadata')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='task_created', to=settings.AUTH_USER_MODEL, verbose_name='Created by')),
                ('deleted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='task_deleted', to=settings.AUTH_USER_MODEL, verbose_name='Deleted by')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tasks', to='persistence.project', verbose_name='Project')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='task_updated', to=settings.AUTH_USER_MODEL, verbose_name='Updated by')),
            ],
            options={
                'verbose_name': 'Task',
                'verbose_name_plural': 'Tasks',
                'db_table': 'tasks',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['project', 'status'], name='tasks_project_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Timestamp')),
                ('user_ip', models.GenericIPAddressField(blank=True, null=True, verbose_name='IP address')),
                ('user_agent', models.CharField(blank=True, max_length=500, verbose_name='User agent')),
                ('action', models.CharField(choices=[('login', 'Login'), ('logout', 'Logout'), ('start_project', 'Start project'), ('import', 'CSV import')], db_index=True, max_length=20, verbose_name='Action')),
                ('object_id', models.CharField(blank=True, db_index=True, max_length=100, verbose_name='Object ID')),
                ('object_repr', models.CharField(blank=True, max_length=500, verbose_name='Object')),
                ('extra_data', models.JSONField(blank=True, default=dict, verbose_name='Extra data')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Audit log entry',
                'verbose_name_plural': 'Audit log',
                'db_table': 'audit_log',
                'ordering': ['-timestamp'],
                'indexes': [
                    models.Index(fields=['user', 'timestamp'], name='audit_log_user_ts_idx'),
                    models.Index(fields=['action', 'timestamp'], name='audit_log_action_ts_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='HistoricalProject',
            fields=[
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Updated at')),
                ('deleted_at', models.DateTimeField(blank=True, null=True, verbose_name='Deleted at')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='Version')),
                ('id', models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, verbose_name='ID')),
                ('user_id', models.CharField(blank=True, db_index=True, max_length=100, verbose_name='Client account ID')),
                ('name', models.CharField(blank=True, max_length=200, verbose_name='Client name')),
                ('email', models.EmailField(db_index=True, max_length=254, verbose_name='Client email')),
                ('kit_type', models.CharField(choices=KIT_TYPE_CHOICES, db_index=True, default='LAUNCH', max_length=20, verbose_name='Kit type')),
                ('phases_state', models.JSONField(blank=True, default=dict, verbose_name='Phase state')),
                ('started_at', models.DateTimeField(blank=True, null=True, verbose_name='Started at')),
                ('current_day_of_14', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(14)], verbose_name='Current day of 14')),
                ('next_from_us', models.TextField(blank=True, verbose_name='Next step from us')),
                ('next_from_you', models.TextField(blank=True, verbose_name='Next step from client')),
                ('onboarding_percent', models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MaxValueValidator(100)], verbose_name='Onboarding completion, %')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                ('created_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Created by')),
                ('deleted_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Deleted by')),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('onboarding_answer', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='persistence.onboardinganswer', verbose_name='Onboarding answer')),
                ('updated_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Updated by')),
            ],
            options={
                'verbose_name': 'historical Project',
                'verbose_name_plural': 'historical Projects',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        migrations.CreateModel(
            name='HistoricalTask',
            fields=[
                ('created_at', models.DateTimeField(blank=True, editable=False, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(blank=True, editable=False, verbose_name='Updated at')),
                ('deleted_at', models.DateTimeField(blank=True, null=True, verbose_name='Deleted at')),
                ('version', models.PositiveIntegerField(default=1, verbose_name='Version')),
                ('id', models.UUIDField(db_index=True, default=uuid.uuid4, editable=False, verbose_name='ID')),
                ('title', models.CharField(max_length=300, verbose_name='Title')),
                ('description', models.TextField(blank=True, null=True, verbose_name='Description')),
                ('type', models.CharField(choices=TASK_TYPE_CHOICES, db_index=True, default='OTHER', max_length=30, verbose_name='Type')),
                ('status', models.CharField(choices=TASK_STATUS_CHOICES, db_index=True, default='PENDING', max_length=30, verbose_name='Status')),
                ('due_date', models.DateTimeField(blank=True, null=True, verbose_name='Due date')),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='Completed at')),
                ('attachments', models.JSONField(blank=True, default=list, verbose_name='Attachments')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadata')),
                ('history_id', models.AutoField(primary_key=True, serialize=False)),
                ('history_date', models.DateTimeField(db_index=True)),
                ('history_change_reason', models.CharField(max_length=100, null=True)),
                ('history_type', models.CharField(choices=HISTORY_TYPE_CHOICES, max_length=1)),
                ('created_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Created by')),
                ('deleted_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Deleted by')),
                ('history_user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('project', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to='persistence.project', verbose_name='Project')),
                ('updated_by', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Updated by')),
            ],
            options={
                'verbose_name': 'historical Task',
                'verbose_name_plural': 'historical Tasks',
                'ordering': ('-history_date', '-history_id'),
                'get_latest_by': ('history_date', 'history_id'),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
