from sqlalchemy import Column, Integer, String, Date, Numeric
from app.database import Base


class Teacher(Base):
    __tablename__ = "teachers"

    teacher_id = Column("teacherid", Integer, primary_key=True, autoincrement=True)
    first_name = Column("teacherfname", String(255), nullable=False)
    last_name = Column("teacherlname", String(255), nullable=False)

    # expected unique, not enforced
    employee_number = Column("employeenumber", String(255), nullable=False)

    hire_date = Column("hiredate", Date, nullable=False)
    salary = Column("salary", Numeric(10, 2), nullable=False)
