"""
Database entity models.

Importing this package registers every table on the shared ``Base`` metadata.
"""

from .blog_posts import BlogPost
from .executives import Executive
from .team_members import TeamMember
from .testimonials import Testimonial
from .users import RefreshToken, User

__all__ = [
    "BlogPost",
    "Executive",
    "RefreshToken",
    "TeamMember",
    "Testimonial",
    "User",
]
