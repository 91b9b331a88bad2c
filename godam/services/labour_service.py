# godam/services/labour_service.py

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from godam.core.exceptions import Conflict, DatastoreError, GodamError, NotFound
from godam.logger_config import logger
from godam.models.labour import (
    Attendance,
    Labour,
    LabourSalary,
    LabourSalarySummary,
    LabourWithdrawal,
)

PRESENT = "present"


def get_labour_by_id(db: Session, labour_id: str) -> Optional[Labour]:
    return db.query(Labour).filter(Labour.id == labour_id).first()


def get_labour_or_404(db: Session, labour_id: str) -> Labour:
    labour = get_labour_by_id(db, labour_id)
    if not labour:
        logger.warning(f"Labour not found: {labour_id}")
        raise NotFound("Labour not found")
    return labour


def attendance_exists(db: Session, labour_id: str, attendance_date: date) -> bool:
    return db.query(Attendance.id).filter(
        Attendance.labour_id == labour_id,
        Attendance.date == attendance_date,
    ).first() is not None


# ==================== CREATE ====================

def create_labour(
    db: Session,
    company_id: str,
    godown_id: str,
    name: str,
    contact: Optional[str] = None,
    role: Optional[str] = None,
    worker_type: str = "Labour",
    daily_wage: Decimal = Decimal("0"),
    monthly_salary: Decimal = Decimal("0"),
    per_kg_rate: Decimal = Decimal("0"),
    status: str = "Active",
    created_by: Optional[str] = None,
) -> Labour:
    """Create a labourer together with an empty salary summary for the current month."""
    try:
        labour = Labour(
            company_id=company_id,
            godown_id=godown_id,
            name=name,
            contact=contact,
            role=role,
            worker_type=worker_type or "Labour",
            daily_wage=daily_wage or Decimal("0"),
            monthly_salary=monthly_salary or Decimal("0"),
            per_kg_rate=per_kg_rate or Decimal("0"),
            status=status or "Active",
            created_by=created_by,
        )
        db.add(labour)
        db.flush()

        now = datetime.now()
        db.add(LabourSalarySummary(
            company_id=company_id,
            godown_id=godown_id,
            labour_id=labour.id,
            month=now.month,
            year=now.year,
        ))

        db.commit()
        db.refresh(labour)

        logger.info(f"Labour added: {labour.name} ({labour.id}) - Godown: {godown_id}")
        return labour

    except Exception as e:
        db.rollback()
        logger.error(f"Error adding labour: {str(e)}", exc_info=True)
        raise DatastoreError()


# ==================== QUERIES ====================

def get_all_labour(
    db: Session, company_id: str, godown_id: str
) -> List[Tuple[Labour, Decimal, Decimal]]:
    """
    Labour of one godown with total withdrawn and total salary earned.

    Each total comes from its own grouped subquery so withdrawals and salary
    rows never multiply each other in the join.
    """
    withdrawn_sq = (
        db.query(
            LabourWithdrawal.labour_id.label("labour_id"),
            func.sum(LabourWithdrawal.amount).label("total"),
        )
        .group_by(LabourWithdrawal.labour_id)
        .subquery()
    )
    earned_sq = (
        db.query(
            LabourSalary.labour_id.label("labour_id"),
            func.sum(LabourSalary.amount).label("total"),
        )
        .group_by(LabourSalary.labour_id)
        .subquery()
    )

    rows = (
        db.query(
            Labour,
            func.coalesce(withdrawn_sq.c.total, 0),
            func.coalesce(earned_sq.c.total, 0),
        )
        .outerjoin(withdrawn_sq, withdrawn_sq.c.labour_id == Labour.id)
        .outerjoin(earned_sq, earned_sq.c.labour_id == Labour.id)
        .filter(Labour.company_id == company_id, Labour.godown_id == godown_id)
        .order_by(Labour.created_at.desc())
        .all()
    )

    logger.info(f"Retrieved {len(rows)} labour for godown {godown_id}")
    return [
        (labour, Decimal(str(withdrawn)), Decimal(str(earned)))
        for labour, withdrawn, earned in rows
    ]


# ==================== ATTENDANCE ====================

def mark_attendance(db: Session, labour_id: str, attendance_date: date, status: str) -> Attendance:
    """
    Mark attendance once per labourer per day.

    A present mark also accrues an unpaid salary row at the labourer's daily
    wage. The (labour_id, date) unique constraint backs the existence check,
    so a concurrent duplicate fails on insert and is reported the same way.
    """
    try:
        labour = get_labour_or_404(db, labour_id)

        if attendance_exists(db, labour_id, attendance_date):
            raise Conflict("Attendance already marked")

        attendance = Attendance(
            company_id=labour.company_id,
            godown_id=labour.godown_id,
            labour_id=labour_id,
            date=attendance_date,
            status=status,
        )
        db.add(attendance)

        if status.lower() == PRESENT:
            daily_wage = labour.daily_wage or Decimal("0")
            db.add(LabourSalary(
                company_id=labour.company_id,
                godown_id=labour.godown_id,
                labour_id=labour_id,
                date=attendance_date,
                amount=daily_wage,
                paid=False,
            ))
            logger.debug(f"Salary accrued for {labour_id} on {attendance_date}: {daily_wage}")

        db.commit()
        db.refresh(attendance)

        logger.info(f"Attendance marked: {labour.name} - {attendance_date} - {status}")
        return attendance

    except GodamError:
        db.rollback()
        raise

    except IntegrityError as ie:
        db.rollback()
        logger.warning(f"Duplicate attendance rejected by constraint: {str(ie)}")
        raise Conflict("Attendance already marked")

    except Exception as e:
        db.rollback()
        logger.error(f"Error marking attendance: {str(e)}", exc_info=True)
        raise DatastoreError()


# ==================== PAYMENT ====================

def record_labour_payment(
    db: Session,
    labour_id: str,
    amount: Decimal,
    payment_date: Optional[date] = None,
    mode: str = "cash",
    type: str = "salary",
) -> LabourWithdrawal:
    """Record a salary payout or advance."""
    labour = get_labour_or_404(db, labour_id)

    withdrawal = LabourWithdrawal(
        company_id=labour.company_id,
        godown_id=labour.godown_id,
        labour_id=labour_id,
        date=payment_date or date.today(),
        amount=amount,
        mode=mode or "cash",
        type=type or "salary",
    )
    db.add(withdrawal)

    try:
        db.commit()
        db.refresh(withdrawal)
        logger.info(f"Labour payment recorded: {labour.name} - {withdrawal.type} - {amount}")
        return withdrawal
    except Exception as e:
        db.rollback()
        logger.error(f"Error recording labour payment: {str(e)}", exc_info=True)
        raise DatastoreError()
