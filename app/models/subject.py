from sqlalchemy import Column, Integer, String, Date
from app.database import Base


class Subject(Base):
    __tablename__ = "classes"

    subject_id = Column("classid", Integer, primary_key=True, autoincrement=True)
    subject_code = Column("classcode", String(255), nullable=False)

    # loose reference to teachers.teacherid (no FK)
    instructor_id = Column("teacherid", Integer, index=True)

    start_date = Column("startdate", Date)
    end_date = Column("finishdate", Date)
    subject_name = Column("classname", String(255), nullable=False)
