import logging
from typing import Any, Optional

from fastapi import Depends
from sqlalchemy import String, cast, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.subject import Subject
from app.models.teacher import Teacher
from app.repositories.result import Result
from app.schemas.teacher import TeacherValidationError, validate_teacher

logger = logging.getLogger("app.teachers")

LIKE_ESCAPE = "\\"


def _like_pattern(keyword: str) -> str:
    escaped = (
        keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _formatted_hire_date(dialect: str):
    """hire date rendered as DD-MM-YYYY, or None when the dialect has no formatter we know."""
    if dialect == "postgresql":
        return func.to_char(Teacher.hire_date, "DD-MM-YYYY")
    if dialect in ("mysql", "mariadb"):
        return func.date_format(Teacher.hire_date, "%d-%m-%Y")
    if dialect == "sqlite":
        return func.strftime("%d-%m-%Y", Teacher.hire_date)
    return None


class TeacherRepository:
    """SQL for the teachers table. One instance per request session."""

    def __init__(self, db: Session):
        self.db = db

    # ── READ ──────────────────────────────────────────────

    def search(self, keyword: Optional[str] = None) -> Result[list[Teacher]]:
        """
        Case-insensitive substring match over names, full name, hire date
        (raw and DD-MM-YYYY) and salary. A None or blank keyword matches every row.
        """
        keyword = (keyword or "").strip()
        try:
            q = self.db.query(Teacher)
            if keyword:
                q = q.filter(self._keyword_filter(keyword))
            rows = q.order_by(Teacher.teacher_id).all()
        except SQLAlchemyError:
            logger.exception("Teacher search failed (keyword=%r)", keyword)
            self.db.rollback()
            return Result.error("Unable to search teachers.")
        return Result.success(rows)

    def _keyword_filter(self, keyword: str):
        pattern = _like_pattern(keyword)
        full_name = Teacher.first_name + " " + Teacher.last_name
        columns = [
            Teacher.first_name,
            Teacher.last_name,
            full_name,
            cast(Teacher.hire_date, String),
            cast(Teacher.salary, String),
        ]
        formatted = _formatted_hire_date(self.db.get_bind().dialect.name)
        if formatted is not None:
            columns.append(formatted)
        return or_(*(c.ilike(pattern, escape=LIKE_ESCAPE) for c in columns))

    def find_by_id(self, teacher_id: int) -> Result[Teacher]:
        try:
            teacher = self.db.query(Teacher).filter(Teacher.teacher_id == teacher_id).first()
        except SQLAlchemyError:
            logger.exception("Teacher lookup failed (id=%s)", teacher_id)
            self.db.rollback()
            return Result.error("Unable to load teacher.")

        if teacher is None:
            logger.info("Teacher %s not found", teacher_id)
            return Result.not_found("Teacher not found.")
        return Result.success(teacher)

    def list_classes(self, teacher_id: int) -> Result[list[Subject]]:
        """Classes whose instructor id points at this teacher."""
        try:
            rows = (
                self.db.query(Subject)
                .filter(Subject.instructor_id == teacher_id)
                .order_by(Subject.start_date, Subject.subject_id)
                .all()
            )
        except SQLAlchemyError:
            logger.exception("Class lookup failed (teacher id=%s)", teacher_id)
            self.db.rollback()
            return Result.error("Unable to load classes.")
        return Result.success(rows)

    # ── WRITE ─────────────────────────────────────────────

    def insert(self, data: Any) -> Result[Teacher]:
        try:
            fields = validate_teacher(data)
        except TeacherValidationError as e:
            return Result.invalid(e.message, e.errors)

        teacher = Teacher(**fields.model_dump())
        try:
            self.db.add(teacher)
            self.db.commit()
            self.db.refresh(teacher)
        except SQLAlchemyError:
            logger.exception("Failed to add teacher %s", fields.employee_number)
            self.db.rollback()
            return Result.error("Unable to add teacher.")

        logger.info("Added teacher #%s (%s)", teacher.teacher_id, teacher.employee_number)
        return Result.success(teacher)

    def update(self, teacher_id: int, data: Any) -> Result[Teacher]:
        """Full-record update; invalid input leaves the stored row untouched."""
        try:
            fields = validate_teacher(data)
        except TeacherValidationError as e:
            return Result.invalid(e.message, e.errors)

        try:
            updated = (
                self.db.query(Teacher)
                .filter(Teacher.teacher_id == teacher_id)
                .update(fields.model_dump(), synchronize_session="fetch")
            )
            self.db.commit()
        except SQLAlchemyError:
            logger.exception("Failed to update teacher %s", teacher_id)
            self.db.rollback()
            return Result.error("Unable to update teacher.")

        if updated == 0:
            return Result.not_found("Teacher not found.")

        logger.info("Updated teacher #%s", teacher_id)
        return Result.success(Teacher(teacher_id=teacher_id, **fields.model_dump()))

    def delete(self, teacher_id: int) -> Result[None]:
        try:
            deleted = (
                self.db.query(Teacher)
                .filter(Teacher.teacher_id == teacher_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            logger.exception("Failed to delete teacher %s", teacher_id)
            self.db.rollback()
            return Result.error("Unable to delete teacher.")

        if deleted == 0:
            return Result.not_found("Teacher not found.")

        logger.info("Deleted teacher #%s", teacher_id)
        return Result.success()


def get_teacher_repo(db: Session = Depends(get_db)) -> TeacherRepository:
    return TeacherRepository(db)
