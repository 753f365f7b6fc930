"""Invoice issuing: command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from payments.domain import payments
from payments.invoice.invoice import Invoice


@payments.command(part_of="Invoice")
class IssueInvoice:
    """Issue a draft invoice to the customer."""

    invoice_id = Identifier(required=True)


@payments.command_handler(part_of=Invoice)
class IssueInvoiceHandler:
    @handle(IssueInvoice)
    def issue_invoice(self, command):
        repo = current_domain.repository_for(Invoice)
        invoice = repo.get(command.invoice_id)
        invoice.issue()
        repo.add(invoice)
