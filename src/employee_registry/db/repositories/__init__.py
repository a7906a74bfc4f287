"""
employee_registry.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories for departments, roles and employees.
"""

from employee_registry.db.repositories.departments import DepartmentRepo
from employee_registry.db.repositories.employees import EmployeeRepo
from employee_registry.db.repositories.roles import RoleRepo

__all__ = ["DepartmentRepo", "EmployeeRepo", "RoleRepo"]
