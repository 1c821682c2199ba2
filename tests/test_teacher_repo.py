from datetime import date
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from app.repositories.result import Status

ADA = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "employeeNum": "E100",
    "hireDate": "2020-01-01",
    "salary": "50000",
}


def _teacher(first, last, num, hired, salary):
    return {"firstName": first, "lastName": last, "employeeNum": num, "hireDate": hired, "salary": salary}


def _broken(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_insert_then_find_returns_same_fields(repo):
    created = repo.insert(ADA)
    assert created.status is Status.OK
    assert created.value.teacher_id > 0

    found = repo.find_by_id(created.value.teacher_id)
    assert found.ok
    t = found.value
    assert (t.first_name, t.last_name, t.employee_number) == ("Ada", "Lovelace", "E100")
    assert t.hire_date == date(2020, 1, 1)
    assert t.salary == Decimal("50000")


def test_delete_then_find_is_not_found(repo, ada):
    # delete commits and expires ada, so keep the id
    teacher_id = ada.teacher_id
    assert repo.delete(teacher_id).status is Status.OK
    assert repo.find_by_id(teacher_id).status is Status.NOT_FOUND


def test_find_missing_id_is_not_found(repo):
    result = repo.find_by_id(999)
    assert result.status is Status.NOT_FOUND
    assert result.value is None


def test_delete_missing_id_is_not_found(repo):
    assert repo.delete(12345).status is Status.NOT_FOUND


def test_invalid_insert_writes_nothing(repo):
    result = repo.insert(_teacher("Ada", "", "E100", "2020-01-01", "1"))
    assert result.status is Status.INVALID
    assert "last name" in result.message
    assert repo.search().value == []


def test_search_without_match_is_empty_list(repo, ada):
    result = repo.search("zzz-nobody")
    assert result.ok
    assert result.value == []


def test_search_none_or_blank_returns_all(repo, ada):
    repo.insert(_teacher("Alan", "Turing", "E200", "2019-06-23", "61000"))
    assert len(repo.search(None).value) == 2
    assert len(repo.search("").value) == 2
    assert len(repo.search("   ").value) == 2


def test_search_by_last_name(repo, ada):
    repo.insert(_teacher("Alan", "Turing", "E200", "2019-06-23", "61000"))
    names = [t.last_name for t in repo.search("Lovelace").value]
    assert names == ["Lovelace"]


def test_search_is_case_insensitive_and_matches_full_name(repo, ada):
    assert [t.teacher_id for t in repo.search("ada LOVE").value] == [ada.teacher_id]


def test_search_matches_hire_date_raw_and_formatted(repo, ada):
    repo.insert(_teacher("Alan", "Turing", "E200", "2019-06-23", "61000"))
    assert [t.last_name for t in repo.search("2020-01").value] == ["Lovelace"]
    assert [t.last_name for t in repo.search("23-06-2019").value] == ["Turing"]


def test_search_matches_salary(repo, ada):
    repo.insert(_teacher("Alan", "Turing", "E200", "2019-06-23", "61000"))
    assert [t.last_name for t in repo.search("6100").value] == ["Turing"]


def test_search_treats_like_wildcards_literally(repo, ada):
    assert repo.search("%").value == []
    assert repo.search("_").value == []


def test_search_results_are_ordered_by_id(repo):
    ids = [repo.insert(_teacher("T", f"Name{i}", f"E{i}", "2018-01-01", "1")).value.teacher_id for i in range(3)]
    assert [t.teacher_id for t in repo.search("Name").value] == ids


def test_update_replaces_all_fields(repo, ada):
    result = repo.update(ada.teacher_id, _teacher("Augusta", "King", "E101", "2021-02-03", "52000.50"))
    assert result.ok

    t = repo.find_by_id(ada.teacher_id).value
    assert (t.first_name, t.last_name, t.employee_number) == ("Augusta", "King", "E101")
    assert t.hire_date == date(2021, 2, 3)
    assert t.salary == Decimal("52000.50")


def test_update_with_negative_salary_leaves_record_unchanged(repo, db, ada):
    result = repo.update(ada.teacher_id, _teacher("Ada", "Lovelace", "E100", "2020-01-01", "-5"))
    assert result.status is Status.INVALID

    db.expire_all()
    t = repo.find_by_id(ada.teacher_id).value
    assert t.salary == Decimal("50000")


def test_update_missing_id_is_not_found(repo):
    result = repo.update(77, ADA)
    assert result.status is Status.NOT_FOUND


def test_list_classes_for_teacher(repo, ada, add_class):
    add_class(ada.teacher_id, code="HTTP5102", start=date(2025, 1, 6))
    add_class(ada.teacher_id, code="HTTP5101", start=date(2024, 9, 4))
    add_class(ada.teacher_id + 1, code="OTHER")

    codes = [c.subject_code for c in repo.list_classes(ada.teacher_id).value]
    assert codes == ["HTTP5101", "HTTP5102"]


def test_classes_survive_teacher_delete(repo, ada, add_class):
    teacher_id = ada.teacher_id
    add_class(teacher_id)
    assert repo.delete(teacher_id).ok
    assert len(repo.list_classes(teacher_id).value) == 1


def test_database_failures_become_error_results(repo, db, monkeypatch, caplog):
    monkeypatch.setattr(db, "query", _broken)
    monkeypatch.setattr(db, "commit", _broken)

    assert repo.search("x").status is Status.ERROR
    assert repo.find_by_id(1).status is Status.ERROR
    assert repo.list_classes(1).status is Status.ERROR
    assert repo.delete(1).status is Status.ERROR
    assert repo.update(1, ADA).status is Status.ERROR
    assert repo.insert(ADA).status is Status.ERROR
    assert "Failed to delete teacher 1" in caplog.text
