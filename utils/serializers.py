"""
Serializers Module - Model to JSON payloads (camelCase keys for the SPA)
"""


def _iso(value):
    return value.isoformat() if value else None


def _date(value):
    return value.strftime('%Y-%m-%d') if value else ''


def user_to_dict(user):
    return {
        'id': user.id,
        'fullName': user.full_name,
        'email': user.email,
        'role': user.role
    }


def project_to_dict(project):
    return {
        'id': project.id,
        'title': project.title,
        'description': project.description,
        'imageUrl': project.image_url,
        'projectUrl': project.project_url,
        'portfolioId': project.portfolio_id
    }


def education_to_dict(education):
    return {
        'id': education.id,
        'institution': education.institution,
        'degree': education.degree,
        'field': education.field,
        'startDate': _date(education.start_date),
        'endDate': _date(education.end_date),
        'description': education.description,
        'portfolioId': education.portfolio_id
    }


def experience_to_dict(experience):
    return {
        'id': experience.id,
        'company': experience.company,
        'position': experience.position,
        'location': experience.location,
        'startDate': _date(experience.start_date),
        'endDate': _date(experience.end_date),
        'description': experience.description,
        'portfolioId': experience.portfolio_id
    }


def skill_to_dict(skill):
    return {
        'id': skill.id,
        'name': skill.name,
        'level': skill.level,
        'portfolioId': skill.portfolio_id
    }


def social_media_link_to_dict(link):
    return {
        'id': link.id,
        'platform': link.platform,
        'url': link.url,
        'iconName': link.icon_name,
        'createdAt': _iso(link.created_at),
        'updatedAt': _iso(link.updated_at),
        'portfolioId': link.portfolio_id
    }


def portfolio_summary_to_dict(portfolio):
    """Portfolio header fields without any section content"""
    return {
        'id': portfolio.id,
        'title': portfolio.title,
        'description': portfolio.description,
        'profileImage': portfolio.profile_image,
        'isPublic': portfolio.is_public,
        'isProjectsPublic': portfolio.is_projects_public,
        'isEducationPublic': portfolio.is_education_public,
        'isExperiencePublic': portfolio.is_experience_public,
        'isSkillsPublic': portfolio.is_skills_public,
        'isSocialMediaPublic': portfolio.is_social_media_public,
        'email': portfolio.email,
        'phone': portfolio.phone,
        'city': portfolio.city,
        'country': portfolio.country,
        'createdAt': _iso(portfolio.created_at),
        'updatedAt': _iso(portfolio.updated_at),
        'userId': portfolio.user_id,
        'userFullName': portfolio.user.full_name if portfolio.user else 'Unknown User',
        'projects': [],
        'educations': [],
        'experiences': [],
        'skills': [],
        'socialMediaLinks': []
    }


def access_request_to_dict(access_request):
    portfolio = access_request.portfolio
    requester = access_request.requester
    return {
        'id': access_request.id,
        'portfolioId': access_request.portfolio_id,
        'portfolioTitle': portfolio.title if portfolio else '',
        'requesterUserId': access_request.requester_user_id,
        'requesterName': requester.full_name if requester else '',
        'requesterEmail': requester.email if requester else '',
        'status': access_request.status,
        'message': access_request.message,
        'ownerResponseNote': access_request.owner_response_note,
        'createdAt': _iso(access_request.created_at),
        'decidedAt': _iso(access_request.decided_at),
        # Nested shapes used by the access-requests page
        'portfolio': {'id': portfolio.id, 'title': portfolio.title} if portfolio else None,
        'requester': {
            'id': requester.id,
            'fullName': requester.full_name,
            'email': requester.email
        } if requester else None
    }


def notification_to_dict(notification):
    return {
        'id': notification.id,
        'type': notification.type,
        'title': notification.title,
        'message': notification.message,
        'isRead': notification.is_read,
        'portfolioId': notification.portfolio_id,
        'accessRequestId': notification.access_request_id,
        'createdAt': _iso(notification.created_at)
    }


__all__ = [
    'user_to_dict',
    'project_to_dict',
    'education_to_dict',
    'experience_to_dict',
    'skill_to_dict',
    'social_media_link_to_dict',
    'portfolio_summary_to_dict',
    'access_request_to_dict',
    'notification_to_dict'
]
