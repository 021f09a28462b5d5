from __future__ import annotations

import logging
from typing import Optional

from ..common.crypto import FieldCipher, decrypt_or_marker
from ..core.enums import Role
from ..core.exceptions import (
    EmployeeNotFound,
    MissingDepartment,
    NoActiveCategoryForDepartment,
    UnassignedCategory,
)
from .model import Employee, WorkCategory
from .repository import EmployeeDirectory, WorkCategoryRepository

logger = logging.getLogger(__name__)


def require_employee(employees: EmployeeDirectory, employee_id: str) -> Employee:
    employee = employees.get_by_id(employee_id)
    if not employee:
        raise EmployeeNotFound(f"Employee '{employee_id}' not found.")
    return employee


class WorkCategoryService:
    """Read-only lookups on work-category (WBS) codes."""

    def __init__(self, categories: WorkCategoryRepository, employees: EmployeeDirectory, cipher: FieldCipher):
        self._categories = categories
        self._employees = employees
        self._cipher = cipher

    def resolve_default_code(self, employee: Employee) -> str:
        """Active default code of the employee's department."""
        if not employee.department_id:
            raise MissingDepartment(f"Employee '{employee.employee_id}' is not assigned to a department.")

        active = self._categories.list_active_for_department(employee.department_id)
        if not active:
            raise NoActiveCategoryForDepartment(
                f"No active WBS code found for department '{employee.department_id}'."
            )
        logger.info("Auto-resolved WBS code '%s' for employee '%s'", active[0].code, employee.employee_id)
        return active[0].code

    def validate_for_employee(self, code: str, employee: Employee) -> WorkCategory:
        """The code must exist, be active, and belong to the employee's own department."""
        category = self._categories.get_by_code(code)
        if not category:
            raise UnassignedCategory(f"The provided WBS code '{code}' does not exist.")
        if not category.is_active:
            raise UnassignedCategory(f"The provided WBS code '{code}' is not active.")
        if not employee.department_id or category.department_id != employee.department_id:
            raise UnassignedCategory(f"WBS code '{code}' is not assigned to your department.")
        return category

    def cost_center_for(self, code: Optional[str]) -> Optional[str]:
        if not code:
            return None
        category = self._categories.get_by_code(code)
        if not category:
            logger.warning("Could not find details for WBS code '%s' to retrieve cost center", code)
            return None
        return category.cost_center

    def list_for_caller(self, *, role: Role, employee_id: str, department_id: Optional[str] = None) -> list[dict]:
        """Employees see their department's active codes; admins see everything."""
        departments = {d.department_id: d for d in self._categories.list_departments()}

        if role == Role.EMPLOYEE:
            employee = self._employees.get_by_id(employee_id)
            if not employee or not employee.department_id:
                logger.warning("Employee '%s' is not assigned to a department, returning no codes", employee_id)
                return []
            dept = departments.get(employee.department_id)
            return [
                {
                    "wbsCode": c.code,
                    "description": decrypt_or_marker(self._cipher, c.description, context=f"wbs {c.code}"),
                    "costCenter": c.cost_center,
                    "departmentName": dept.department_name if dept else None,
                }
                for c in self._categories.list_active_for_department(employee.department_id)
            ]

        out = []
        for c in self._categories.list_all(department_id=department_id):
            dept = departments.get(c.department_id)
            if not dept:
                logger.warning(
                    "Data integrity issue: WBS code '%s' linked to unknown department '%s'", c.code, c.department_id
                )
                continue
            out.append(
                {
                    "wbsCode": c.code,
                    "description": decrypt_or_marker(self._cipher, c.description, context=f"wbs {c.code}"),
                    "costCenter": c.cost_center,
                    "department": {"departmentId": dept.department_id, "departmentName": dept.department_name},
                    "isActive": c.is_active,
                    "createdBy": c.created_by,
                }
            )
        return out
