"""Form assemblers: trade job form, work-order form and estimate builder."""

from tradedesk.forms.assembler import JobSubmission, assemble
from tradedesk.forms.fields import FieldDescriptor, FieldKind, fields_for

__all__ = ["FieldDescriptor", "FieldKind", "JobSubmission", "assemble", "fields_for"]
