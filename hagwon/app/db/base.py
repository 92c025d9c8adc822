from hagwon.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from hagwon.app.models.tenant import Tenant  # noqa: F401
from hagwon.app.models.user import User  # noqa: F401
from hagwon.app.models.student import Student  # noqa: F401
from hagwon.app.models.guardian import Guardian, GuardianStudent  # noqa: F401
from hagwon.app.models.academy_class import AcademyClass, ClassEnrollment  # noqa: F401
from hagwon.app.models.attendance import AttendanceRecord, AttendanceSession  # noqa: F401
from hagwon.app.models.invoice import Invoice  # noqa: F401
from hagwon.app.models.invoice_item import InvoiceItem  # noqa: F401
from hagwon.app.models.payment import Payment  # noqa: F401
