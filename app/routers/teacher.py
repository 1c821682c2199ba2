import logging
from io import BytesIO
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Query, Request, Response
from fastapi.responses import RedirectResponse, StreamingResponse
from fastapi.templating import Jinja2Templates

from app.repositories.result import Status
from app.repositories.teacher_repo import TeacherRepository, get_teacher_repo
from app.utils.excel_export import teachers_to_xlsx_bytes, make_filename

logger = logging.getLogger("app.teachers")

router = APIRouter(prefix="/Teacher", tags=["Teacher pages"], include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def _to_list(error: Optional[str] = None) -> RedirectResponse:
    url = "/Teacher/List"
    if error:
        url += "?" + urlencode({"error": error})
    return RedirectResponse(url, status_code=303)


def _form_data(firstName, lastName, employeeNum, hireDate, salary) -> dict:
    return {
        "firstName": firstName,
        "lastName": lastName,
        "employeeNum": employeeNum,
        "hireDate": hireDate,
        "salary": salary,
    }


@router.get("")
@router.get("/Index")
def index(request: Request):
    return templates.TemplateResponse(request, "teacher/index.html", {})


@router.get("/List")
def list_teachers(
    request: Request,
    SearchKeyword: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    result = repo.search(SearchKeyword)
    status_code = 200
    if not result.ok:
        error = result.message
        status_code = 500

    return templates.TemplateResponse(
        request,
        "teacher/list.html",
        {
            "teachers": result.value or [],
            "keyword": SearchKeyword or "",
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/Export")
def export_teachers(
    SearchKeyword: Optional[str] = Query(None),
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    result = repo.search(SearchKeyword)
    if not result.ok:
        return _to_list(result.message)

    content = teachers_to_xlsx_bytes(result.value)
    filename = make_filename()
    return StreamingResponse(
        BytesIO(content),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/Show/{teacher_id}")
def show_teacher(
    request: Request,
    teacher_id: int,
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    result = repo.find_by_id(teacher_id)
    if not result.ok:
        # not surfaced as 404: back to the list with a banner
        return _to_list(result.message)

    classes = repo.list_classes(teacher_id)
    return templates.TemplateResponse(
        request,
        "teacher/show.html",
        {
            "teacher": result.value,
            "classes": classes.value or [],
            "error": None if classes.ok else classes.message,
        },
    )


@router.get("/NewTeacher")
@router.get("/Ajax_NewTeacher")
def new_teacher(request: Request):
    return templates.TemplateResponse(request, "teacher/new.html", {"form": {}, "message": None})


@router.post("/Create")
def create_teacher(
    request: Request,
    firstName: Optional[str] = Form(None),
    lastName: Optional[str] = Form(None),
    employeeNum: Optional[str] = Form(None),
    hireDate: Optional[str] = Form(None),
    salary: Optional[str] = Form(None),
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    form = _form_data(firstName, lastName, employeeNum, hireDate, salary)
    result = repo.insert(form)

    if result.status is Status.OK:
        return _to_list()

    status_code = 500 if result.status is Status.ERROR else 200
    return templates.TemplateResponse(
        request,
        "teacher/new.html",
        {"form": form, "message": result.message},
        status_code=status_code,
    )


@router.get("/Update/{teacher_id}")
def update_form(
    request: Request,
    teacher_id: int,
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    result = repo.find_by_id(teacher_id)
    if not result.ok:
        return _to_list(result.message)

    t = result.value
    form = _form_data(t.first_name, t.last_name, t.employee_number, t.hire_date.isoformat(), str(t.salary))
    return templates.TemplateResponse(
        request,
        "teacher/update.html",
        {"teacher_id": teacher_id, "form": form, "message": None},
    )


@router.post("/Update/{teacher_id}")
def update_teacher(
    request: Request,
    teacher_id: int,
    firstName: Optional[str] = Form(None),
    lastName: Optional[str] = Form(None),
    employeeNum: Optional[str] = Form(None),
    hireDate: Optional[str] = Form(None),
    salary: Optional[str] = Form(None),
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    form = _form_data(firstName, lastName, employeeNum, hireDate, salary)
    result = repo.update(teacher_id, form)

    if result.status is Status.OK:
        return RedirectResponse(f"/Teacher/Show/{teacher_id}", status_code=303)
    if result.status is Status.NOT_FOUND:
        return _to_list(result.message)

    status_code = 500 if result.status is Status.ERROR else 200
    return templates.TemplateResponse(
        request,
        "teacher/update.html",
        {"teacher_id": teacher_id, "form": form, "message": result.message},
        status_code=status_code,
    )


@router.get("/DeleteConfirmation/{teacher_id}")
@router.get("/Ajax_DeleteConfirmation/{teacher_id}")
def delete_confirmation(
    request: Request,
    teacher_id: int,
    repo: TeacherRepository = Depends(get_teacher_repo),
):
    result = repo.find_by_id(teacher_id)
    if not result.ok:
        return _to_list(result.message)
    return templates.TemplateResponse(request, "teacher/delete_confirm.html", {"teacher": result.value})


@router.post("/Delete/{teacher_id}")
def delete_teacher(teacher_id: int, repo: TeacherRepository = Depends(get_teacher_repo)):
    result = repo.delete(teacher_id)
    status_code = {Status.OK: 200, Status.NOT_FOUND: 404}.get(result.status, 500)
    return Response(status_code=status_code)
