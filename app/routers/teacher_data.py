from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from app.repositories.result import Result, Status
from app.repositories.teacher_repo import TeacherRepository, get_teacher_repo
from app.schemas.subject import SubjectOut
from app.schemas.teacher import TeacherAddedOut, TeacherDetailOut, TeacherOut

router = APIRouter(prefix="/api/TeacherData", tags=["Teacher API"])


def _raise_for(result: Result):
    if result.status is Status.NOT_FOUND:
        raise HTTPException(status_code=404, detail=result.message)
    if result.status is Status.INVALID:
        raise HTTPException(status_code=400, detail={"message": result.message, "errors": list(result.errors)})
    if result.status is Status.ERROR:
        raise HTTPException(status_code=500, detail=result.message)


@router.get("/ListTeachers", response_model=list[TeacherOut])
@router.get("/ListTeachers/{keyword}", response_model=list[TeacherOut])
def list_teachers(
    keyword: Optional[str] = None,
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    result = repo.search(keyword)
    _raise_for(result)
    return result.value


@router.get("/FindTeacher/{teacher_id}", response_model=TeacherDetailOut)
def find_teacher(teacher_id: int, repo: TeacherRepository = Depends(get_teacher_repo)):
    result = repo.find_by_id(teacher_id)
    _raise_for(result)

    classes = repo.list_classes(teacher_id)
    _raise_for(classes)

    base = TeacherOut.model_validate(result.value)
    return TeacherDetailOut(
        **base.model_dump(),
        classes=[SubjectOut.model_validate(s) for s in classes.value],
    )


@router.post("/AddTeacher", response_model=TeacherAddedOut)
def add_teacher(
    body: Any = Body(...),
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    result = repo.insert(body)
    _raise_for(result)
    return TeacherAddedOut(detail="Teacher added successfully", teacher_id=result.value.teacher_id)


@router.post("/UpdateTeacher/{teacher_id}", response_model=TeacherOut)
def update_teacher(
    teacher_id: int,
    body: Any = Body(...),
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    result = repo.update(teacher_id, body)
    _raise_for(result)
    return result.value


@router.post("/DeleteTeacher/{teacher_id}")
def delete_teacher(teacher_id: int, repo: TeacherRepository = Depends(get_teacher_repo)):
    result = repo.delete(teacher_id)
    _raise_for(result)
    return {"detail": "Teacher deleted successfully"}
