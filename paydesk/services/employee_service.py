"""
PayDesk HR - Employee Service

Business logic for employee records.
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from paydesk.models.employee import Employee
from paydesk.utils.error_handling import EmployeeNotFoundException, InvalidDateRangeException


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_employees(
        self,
        search: Optional[str] = None,
        active_on: Optional[date] = None,
    ) -> List[Employee]:
        """
        List employees ordered by name.

        Args:
            search: substring of name or position
            active_on: only employees not terminated before this date
        """
        query = select(Employee)

        if search:
            search_term = f"%{search}%"
            query = query.where(
                (Employee.name.ilike(search_term)) |
                (Employee.position.ilike(search_term))
            )

        if active_on:
            query = query.where(
                or_(Employee.termination_date.is_(None), Employee.termination_date >= active_on)
            )

        query = query.order_by(Employee.name)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_employee(self, employee_id: uuid.UUID) -> Optional[Employee]:
        result = await self.db.execute(
            select(Employee).where(Employee.id == employee_id)
        )
        return result.scalar_one_or_none()

    async def get_employee_or_raise(self, employee_id: uuid.UUID) -> Employee:
        employee = await self.get_employee(employee_id)
        if employee is None:
            raise EmployeeNotFoundException(employee_id)
        return employee

    async def create_employee(
        self,
        name: str,
        hire_date: date,
        position: str = "",
        rate: Decimal = Decimal("1.00"),
        base_salary: Optional[Decimal] = None,
        termination_date: Optional[date] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        tax_identifier: Optional[str] = None,
    ) -> Employee:
        """Create a new employee."""
        employee = Employee(
            name=name,
            position=position,
            hire_date=hire_date,
            termination_date=termination_date,
            rate=rate,
            base_salary=base_salary,
            email=email,
            phone=phone,
            tax_identifier=tax_identifier,
        )

        self.db.add(employee)
        await self.db.commit()
        await self.db.refresh(employee)

        return employee

    async def update_employee(
        self,
        employee: Employee,
        **kwargs,
    ) -> Employee:
        """Update an employee; None values are left unchanged."""
        hire_date = kwargs.get("hire_date") or employee.hire_date
        termination_date = kwargs.get("termination_date") or employee.termination_date
        if termination_date is not None and termination_date < hire_date:
            raise InvalidDateRangeException(str(hire_date), str(termination_date))

        for key, value in kwargs.items():
            if value is not None and hasattr(employee, key):
                setattr(employee, key, value)

        await self.db.commit()
        await self.db.refresh(employee)

        return employee

    async def delete_employee(self, employee: Employee) -> bool:
        """Delete an employee with their timesheets, payroll and vacations."""
        await self.db.delete(employee)
        await self.db.commit()
        return True
