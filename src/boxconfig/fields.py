"""Field catalog of the stash-box server configuration."""

from __future__ import annotations

from boxconfig.schema import ConfigSchema, FieldKind, FieldSpec

TEXT = FieldKind.TEXT
INTEGER = FieldKind.INTEGER
BOOLEAN = FieldKind.BOOLEAN
STRING_LIST = FieldKind.STRING_LIST

GENERAL = "General"
VOTING = "Voting & Edits"
EMAIL = "Email"
IMAGES = "Images"
S3 = "S3"
DATABASE = "Database"
OTHER = "Other"

CONFIG_FIELDS: tuple[FieldSpec, ...] = (
    # General
    FieldSpec(
        "title",
        TEXT,
        "Title",
        "Title of the instance, used in the page title.",
        GENERAL,
        placeholder="Stash-Box",
    ),
    FieldSpec(
        "host_url",
        TEXT,
        "Host URL",
        "Base URL for the server. Used when sending emails.",
        GENERAL,
        placeholder="https://hostname.com",
    ),
    FieldSpec(
        "guidelines_url",
        TEXT,
        "Guidelines URL",
        "URL to link to a set of guidelines for users contributing edits.",
        GENERAL,
        placeholder="https://hostname.com/guidelines",
    ),
    FieldSpec(
        "require_invite",
        BOOLEAN,
        "Require Invite",
        "If true, users are required to enter an invite key to create a new account.",
        GENERAL,
    ),
    FieldSpec(
        "require_activation",
        BOOLEAN,
        "Require Activation",
        "If true, users are required to verify their email address before creating an account.",
        GENERAL,
    ),
    FieldSpec(
        "require_scene_draft",
        BOOLEAN,
        "Require Scene Draft",
        "Whether to allow scene creation outside of draft submissions.",
        GENERAL,
    ),
    FieldSpec(
        "activation_expiry",
        INTEGER,
        "Activation Expiry (seconds)",
        "Time after which an activation key expires. (Default: 7200 = 2 hours)",
        GENERAL,
    ),
    FieldSpec(
        "email_cooldown",
        INTEGER,
        "Email Cooldown (seconds)",
        "Time a user must wait before submitting another activation request. "
        "(Default: 300 = 5 minutes)",
        GENERAL,
    ),
    FieldSpec(
        "default_user_roles",
        STRING_LIST,
        "Default User Roles",
        "Comma-separated roles assigned to new users when registering.",
        GENERAL,
        placeholder="READ, VOTE, EDIT",
    ),
    FieldSpec(
        "require_tag_role",
        BOOLEAN,
        "Require Tag Role",
        "Whether to require the EditTag role to edit tags.",
        GENERAL,
    ),
    # Voting & edits
    FieldSpec(
        "vote_promotion_threshold",
        INTEGER,
        "Vote Promotion Threshold",
        "Number of approved edits before a user automatically gets VOTE role. "
        "Leave empty to disable.",
        VOTING,
    ),
    FieldSpec(
        "vote_application_threshold",
        INTEGER,
        "Vote Application Threshold",
        "Number of same votes required for immediate application of an edit. (Default: 3)",
        VOTING,
    ),
    FieldSpec(
        "edit_update_limit",
        INTEGER,
        "Edit Update Limit",
        "Number of times an edit can be updated by the creator. (Default: 1)",
        VOTING,
    ),
    FieldSpec(
        "voting_period",
        INTEGER,
        "Voting Period (seconds)",
        "Time before a voting period is closed. (Default: 345600 = 4 days)",
        VOTING,
    ),
    FieldSpec(
        "min_destructive_voting_period",
        INTEGER,
        "Min Destructive Voting Period (seconds)",
        "Minimum time that needs to pass before a destructive edit can be immediately "
        "applied. (Default: 172800 = 2 days)",
        VOTING,
    ),
    FieldSpec(
        "vote_cron_interval",
        TEXT,
        "Vote Cron Interval",
        "Time between runs to close edits whose voting periods have ended. (Default: 5m)",
        VOTING,
        placeholder="5m",
    ),
    # Email
    FieldSpec(
        "email_host",
        TEXT,
        "Email Host",
        "Address of the SMTP server. Required to send emails for activation and recovery.",
        EMAIL,
        placeholder="smtp.example.com",
    ),
    FieldSpec(
        "email_port",
        INTEGER,
        "Email Port",
        "Port of the SMTP server. Only STARTTLS is supported. (Default: 25)",
        EMAIL,
    ),
    FieldSpec(
        "email_user",
        TEXT,
        "Email User",
        "Username for the SMTP server (optional).",
        EMAIL,
        placeholder="username",
    ),
    FieldSpec(
        "email_password",
        TEXT,
        "Email Password",
        "Password for the SMTP server (optional).",
        EMAIL,
        placeholder="password",
        secret=True,
    ),
    FieldSpec(
        "email_from",
        TEXT,
        "Email From",
        "Email address from which to send emails.",
        EMAIL,
        placeholder="noreply@example.com",
    ),
    # Images
    FieldSpec(
        "image_location",
        TEXT,
        "Image Location",
        "Path to store images, for local image storage.",
        IMAGES,
        placeholder="/path/to/images",
    ),
    FieldSpec(
        "image_backend",
        TEXT,
        "Image Backend",
        "Storage solution for images.",
        IMAGES,
        choices=("file", "s3"),
    ),
    FieldSpec(
        "image_jpeg_quality",
        INTEGER,
        "Image JPEG Quality",
        "Quality setting when resizing JPEG images (0-100). (Default: 75)",
        IMAGES,
    ),
    FieldSpec(
        "image_max_size",
        INTEGER,
        "Image Max Size",
        "Max size of image if no size is specified. Omit to return full size.",
        IMAGES,
    ),
    FieldSpec(
        "image_resizing_enabled",
        BOOLEAN,
        "Image Resizing Enabled",
        "Whether to resize images shown in the frontend.",
        IMAGES,
    ),
    FieldSpec(
        "image_resizing_cache_path",
        TEXT,
        "Image Resizing Cache Path",
        "Folder where resized images will be saved for later requests.",
        IMAGES,
        placeholder="/path/to/cache",
    ),
    FieldSpec(
        "image_resizing_min_size",
        INTEGER,
        "Image Resizing Min Size",
        "Only resize images above a certain size.",
        IMAGES,
    ),
    FieldSpec(
        "favicon_path",
        TEXT,
        "Favicon Path",
        "Location where favicons for linked sites should be stored. Leave empty to disable.",
        IMAGES,
        placeholder="/path/to/favicons",
    ),
    # S3
    FieldSpec(
        "s3_endpoint",
        TEXT,
        "S3 Endpoint",
        "Hostname to S3 endpoint used for image storage.",
        S3,
        placeholder="s3.amazonaws.com",
    ),
    FieldSpec(
        "s3_bucket",
        TEXT,
        "S3 Bucket",
        "Name of S3 bucket used to store images.",
        S3,
        placeholder="my-bucket",
    ),
    FieldSpec(
        "s3_access_key",
        TEXT,
        "S3 Access Key",
        "Access key used for authentication.",
        S3,
        secret=True,
    ),
    FieldSpec(
        "s3_secret",
        TEXT,
        "S3 Secret",
        "Secret access key used for authentication.",
        S3,
        secret=True,
    ),
    FieldSpec(
        "s3_max_dimension",
        INTEGER,
        "S3 Max Dimension",
        "If set, a resized copy will be created for any image whose dimensions exceed "
        "this number.",
        S3,
    ),
    # Database
    FieldSpec(
        "postgres_max_open_conns",
        INTEGER,
        "Max Open Connections",
        "Maximum number of concurrent open connections to the database. "
        "(Default: 0 = unlimited)",
        DATABASE,
    ),
    FieldSpec(
        "postgres_max_idle_conns",
        INTEGER,
        "Max Idle Connections",
        "Maximum number of concurrent idle database connections. (Default: 0 = unlimited)",
        DATABASE,
    ),
    FieldSpec(
        "postgres_conn_max_lifetime",
        INTEGER,
        "Connection Max Lifetime (minutes)",
        "Maximum lifetime in minutes before a connection is released. "
        "(Default: 0 = unlimited)",
        DATABASE,
    ),
    # Other
    FieldSpec(
        "phash_distance",
        INTEGER,
        "pHash Distance",
        "Binary distance considered a match when querying with a pHash fingerprint. "
        "Using more than 8 is not recommended. (Default: 0)",
        OTHER,
    ),
    FieldSpec(
        "draft_time_limit",
        INTEGER,
        "Draft Time Limit (seconds)",
        "Time before a draft is deleted. (Default: 86400 = 24h)",
        OTHER,
    ),
    FieldSpec(
        "profiler_port",
        INTEGER,
        "Profiler Port",
        "Port on which to serve pprof output. Omit to disable entirely. "
        "(Default: 0 = disabled)",
        OTHER,
    ),
    FieldSpec(
        "user_log_file",
        TEXT,
        "User Log File",
        "Path to the user log file, which logs user operations. If not set, these will "
        "be output to stderr.",
        OTHER,
        placeholder="/path/to/user.log",
    ),
    FieldSpec(
        "csp",
        TEXT,
        "Content Security Policy",
        "Contents of the Content-Security-Policy header.",
        OTHER,
        placeholder="default-src 'self'",
    ),
)

STASHBOX_SCHEMA = ConfigSchema(CONFIG_FIELDS, record_name="ConfigRecord")

ConfigRecord = STASHBOX_SCHEMA.record_model
