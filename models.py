from extensions import db
from datetime import datetime, timezone
from flask_login import UserMixin


def utcnow():
    """Naive UTC timestamp, matching what the DateTime columns store"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Role:
    USER = 'User'
    ADMIN = 'Admin'


class AccessRequestStatus:
    PENDING = 'Pending'
    APPROVED = 'Approved'
    REJECTED = 'Rejected'

    ALL = (PENDING, APPROVED, REJECTED)


class NotificationType:
    ACCESS_REQUESTED = 'AccessRequested'
    ACCESS_APPROVED = 'AccessApproved'
    ACCESS_REJECTED = 'AccessRejected'
    PORTFOLIO_VIEWED = 'PortfolioViewed'

    ALL = (ACCESS_REQUESTED, ACCESS_APPROVED, ACCESS_REJECTED, PORTFOLIO_VIEWED)


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(100), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=Role.USER)
    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    portfolios = db.relationship('Portfolio', backref='user', lazy=True, cascade='all, delete-orphan')

    @property
    def is_admin(self):
        return self.role == Role.ADMIN


class Portfolio(db.Model):
    __tablename__ = 'portfolios'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    title = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    profile_image = db.Column(db.String(500), nullable=False, default='')
    is_public = db.Column(db.Boolean, nullable=False, default=True)
    # Section visibility flags, independent of is_public and of each other
    is_projects_public = db.Column(db.Boolean, nullable=False, default=True)
    is_education_public = db.Column(db.Boolean, nullable=False, default=True)
    is_experience_public = db.Column(db.Boolean, nullable=False, default=True)
    is_skills_public = db.Column(db.Boolean, nullable=False, default=True)
    is_social_media_public = db.Column(db.Boolean, nullable=False, default=True)
    # Contact fields
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    city = db.Column(db.String(100))
    country = db.Column(db.String(100))
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    projects = db.relationship('Project', backref='portfolio', lazy=True, cascade='all, delete-orphan')
    educations = db.relationship('Education', backref='portfolio', lazy=True, cascade='all, delete-orphan')
    experiences = db.relationship('Experience', backref='portfolio', lazy=True, cascade='all, delete-orphan')
    skills = db.relationship('Skill', backref='portfolio', lazy=True, cascade='all, delete-orphan')
    social_media_links = db.relationship('SocialMediaLink', backref='portfolio', lazy=True, cascade='all, delete-orphan')
    access_requests = db.relationship('AccessRequest', backref='portfolio', lazy=True, cascade='all, delete-orphan')
    view_logs = db.relationship('PortfolioViewLog', backref='portfolio', lazy=True, cascade='all, delete-orphan')


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.Integer, primary_key=True)
    portfolio_id = db.Column(db.Integer, db.ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False, index=True)
    title = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    image_url = db.Column(db.String(500), nullable=False, default='')
    project_url = db.Column(db.String(500), nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Education(db.Model):
    __tablename__ = 'educations'
    id = db.Column(db.Integer, primary_key=True)
    portfolio_id = db.Column(db.Integer, db.ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False, index=True)
    institution = db.Column(db.String(100), nullable=False)
    degree = db.Column(db.String(100), nullable=False)
    field = db.Column(db.String(255), nullable=False, default='')
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date)
    description = db.Column(db.Text, nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Experience(db.Model):
    __tablename__ = 'experiences'
    id = db.Column(db.Integer, primary_key=True)
    portfolio_id = db.Column(db.Integer, db.ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False, index=True)
    company = db.Column(db.String(100), nullable=False)
    position = db.Column(db.String(100), nullable=False)
    location = db.Column(db.String(255), nullable=False, default='')
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date)
    description = db.Column(db.Text, nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Skill(db.Model):
    __tablename__ = 'skills'
    id = db.Column(db.Integer, primary_key=True)
    portfolio_id = db.Column(db.Integer, db.ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(50), nullable=False)
    level = db.Column(db.Integer, nullable=False, default=3)  # 1..5
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class SocialMediaLink(db.Model):
    __tablename__ = 'social_media_links'
    id = db.Column(db.Integer, primary_key=True)
    portfolio_id = db.Column(db.Integer, db.ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False, index=True)
    platform = db.Column(db.String(50), nullable=False)
    url = db.Column(db.String(500), nullable=False)
    icon_name = db.Column(db.String(50), nullable=False, default='')
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class AccessRequest(db.Model):
    __tablename__ = 'access_requests'
    id = db.Column(db.Integer, primary_key=True)
    portfolio_id = db.Column(db.Integer, db.ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False)
    requester_user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default=AccessRequestStatus.PENDING)
    message = db.Column(db.String(500))
    owner_response_note = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=utcnow)
    decided_at = db.Column(db.DateTime)

    requester = db.relationship('User', backref=db.backref('sent_access_requests', lazy=True))

    # One request per (portfolio, requester) whatever its status
    __table_args__ = (
        db.UniqueConstraint('portfolio_id', 'requester_user_id', name='uq_access_request_portfolio_requester'),
    )


class Notification(db.Model):
    __tablename__ = 'notifications'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    type = db.Column(db.String(30), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.String(1000))
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    # Lookup-only back references, not foreign keys
    portfolio_id = db.Column(db.Integer)
    access_request_id = db.Column(db.Integer)
    created_at = db.Column(db.DateTime, default=utcnow)

    user = db.relationship('User', backref=db.backref('notifications', lazy=True, cascade='all, delete-orphan'))

    __table_args__ = (
        db.Index('idx_notification_user_date', 'user_id', 'created_at'),
    )


class PortfolioViewLog(db.Model):
    __tablename__ = 'portfolio_view_logs'
    id = db.Column(db.Integer, primary_key=True)
    portfolio_id = db.Column(db.Integer, db.ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False)
    viewer_user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'))
    viewer_name = db.Column(db.String(100))
    viewer_email = db.Column(db.String(100))
    ip_address = db.Column(db.String(45))
    user_agent = db.Column(db.String(500))
    viewed_at = db.Column(db.DateTime, default=utcnow)

    __table_args__ = (
        db.Index('idx_view_log_portfolio_date', 'portfolio_id', 'viewed_at'),
    )
