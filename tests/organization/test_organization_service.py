from __future__ import annotations

import pytest

from src.hrms_portal.hrms_portal.core.enums import RecordStatus
from src.hrms_portal.hrms_portal.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.hrms_portal.hrms_portal.organization.service import OrganizationService
from tests.fakes import InMemoryOrganizationRepo


def _build():
    repo = InMemoryOrganizationRepo()
    return OrganizationService(repo), repo


def test_company_codes_are_uppercased_and_unique():
    svc, _ = _build()

    company = svc.create_company({"name": "Acme Corp", "code": "acme", "email": "HR@Acme.test"})

    assert company.code == "ACME"
    assert company.email == "hr@acme.test"
    assert company.status == RecordStatus.ACTIVE
    with pytest.raises(ConflictError):
        svc.create_company({"name": "Other", "code": "ACME"})
    with pytest.raises(ValidationError):
        svc.create_company({"name": "Bad", "code": "BAD", "email": "not-an-email"})


def test_company_update_keeps_its_own_code():
    svc, _ = _build()
    company = svc.create_company({"name": "Acme Corp", "code": "ACME"})

    updated = svc.update_company(company.company_id, {"name": "Acme Ltd", "code": "ACME", "status": "Inactive"})

    assert updated.name == "Acme Ltd"
    assert updated.status == RecordStatus.INACTIVE


def test_department_branch_must_belong_to_company():
    svc, _ = _build()
    acme = svc.create_company({"name": "Acme", "code": "ACME"})
    globex = svc.create_company({"name": "Globex", "code": "GLBX"})
    branch = svc.create_branch({"companyId": globex.company_id, "name": "Pune"})

    with pytest.raises(ValidationError):
        svc.create_department({"companyId": acme.company_id, "branchId": branch.branch_id, "name": "Sales"})

    dept = svc.create_department({"companyId": globex.company_id, "branchId": branch.branch_id, "name": "Sales"})
    assert dept.branch_id == branch.branch_id
    with pytest.raises(ConflictError):
        svc.create_department({"companyId": globex.company_id, "name": "sales"})


def test_designation_department_must_belong_to_company():
    svc, _ = _build()
    acme = svc.create_company({"name": "Acme", "code": "ACME"})
    globex = svc.create_company({"name": "Globex", "code": "GLBX"})
    dept = svc.create_department({"companyId": acme.company_id, "name": "Engineering"})

    with pytest.raises(ValidationError):
        svc.create_designation({"companyId": globex.company_id, "departmentId": dept.department_id, "name": "SDE"})

    designation = svc.create_designation({"companyId": acme.company_id, "departmentId": dept.department_id, "name": "SDE"})
    assert designation.department_id == dept.department_id


def test_records_in_use_cannot_be_deleted():
    svc, repo = _build()
    acme = svc.create_company({"name": "Acme", "code": "ACME"})
    branch = svc.create_branch({"companyId": acme.company_id, "name": "Pune"})
    dept = svc.create_department({"companyId": acme.company_id, "branchId": branch.branch_id, "name": "Engineering"})
    designation = svc.create_designation({"companyId": acme.company_id, "departmentId": dept.department_id, "name": "SDE"})
    repo.designation_employees[designation.designation_id] = 1

    with pytest.raises(ConflictError):
        svc.delete_company(acme.company_id)
    with pytest.raises(ConflictError):
        svc.delete_branch(branch.branch_id)
    with pytest.raises(ConflictError):
        svc.delete_department(dept.department_id)
    with pytest.raises(ConflictError):
        svc.delete_designation(designation.designation_id)

    repo.designation_employees.clear()
    svc.delete_designation(designation.designation_id)
    svc.delete_department(dept.department_id)
    svc.delete_branch(branch.branch_id)
    svc.delete_company(acme.company_id)
    with pytest.raises(NotFoundError):
        svc.get_company(acme.company_id)


def test_branch_with_departments_cannot_change_company():
    svc, _ = _build()
    acme = svc.create_company({"name": "Acme", "code": "ACME"})
    globex = svc.create_company({"name": "Globex", "code": "GLBX"})
    branch = svc.create_branch({"companyId": acme.company_id, "name": "Pune"})
    svc.create_department({"companyId": acme.company_id, "branchId": branch.branch_id, "name": "Engineering"})

    with pytest.raises(ConflictError):
        svc.update_branch(branch.branch_id, {"companyId": globex.company_id, "name": "Pune"})
