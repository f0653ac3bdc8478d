"""
Sections Blueprints - Projects, education, experience and skills
Each section type gets its own URL prefix with the same CRUD routes
"""

from flask import Blueprint

project_bp = Blueprint('project', __name__, url_prefix='/api/Project')
education_bp = Blueprint('education', __name__, url_prefix='/api/Education')
experience_bp = Blueprint('experience', __name__, url_prefix='/api/Experience')
skill_bp = Blueprint('skill', __name__, url_prefix='/api/Skill')

from . import routes
