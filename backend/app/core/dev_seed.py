import os

from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.models.course import Course, Lesson
from backend.app.models.user import User


DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_STUDENTS = [
    "student@test.com",
]
DEFAULT_DEV_COURSES = [
    ("Introdução à Programação", ["Variáveis", "Condicionais", "Laços"]),
    ("Fundamentos de Dados", ["Planilhas", "Gráficos"]),
]


def ensure_dev_data(db: Session) -> None:
    """
    Create a default student and a small course catalog for local development.
    Skips execution when running under pytest to avoid altering test expectations.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return
    seed_dev_data(db)


def seed_dev_data(db: Session) -> None:
    created = False
    for email in DEFAULT_DEV_STUDENTS:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            continue

        db.add(User(email=email, hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD), is_active=True))
        created = True

    for title, lesson_titles in DEFAULT_DEV_COURSES:
        if db.query(Course).filter(Course.title == title).first():
            continue
        course = Course(title=title)
        course.lessons = [
            Lesson(title=lesson_title, order_index=index, duration_minutes=15)
            for index, lesson_title in enumerate(lesson_titles)
        ]
        db.add(course)
        created = True

    if created:
        db.commit()
