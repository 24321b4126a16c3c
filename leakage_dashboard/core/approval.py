"""
Operator-approved proposal application.

Applying a proposal sends an apply_proposal action to the agent. Success adds
one operator audit entry; failure adds none. The in-flight marker for the
proposal clears either way.
"""

import time
from typing import Optional

from .coercion import utc_now_iso
from .records import AuditEntry, Proposal
from ..util.logging import logger


class ProposalNotFoundError(KeyError):
    """No proposal with the requested id is on the dashboard."""


class ProposalInFlightError(Exception):
    """The proposal is already being applied."""


def build_apply_action(proposal: Proposal) -> dict:
    return {
        "type": "apply_proposal",
        "payload": {
            "proposalId": proposal.id,
            "proposal": proposal.to_wire(),
        },
    }


def build_operator_audit_entry(proposal: Proposal, timestamp: Optional[str] = None) -> AuditEntry:
    return AuditEntry(
        id=f"operator-apply-{proposal.id}-{int(time.time() * 1000)}",
        timestamp=timestamp or utc_now_iso(),
        actor="Operator",
        action=f"Apply {proposal.action_type}",
        details=proposal.summary or proposal.title,
        raw={"proposalId": proposal.id},
    )


class ProposalApplier:
    """
    Forwards approved proposals to the agent control channel.

    There is no timeout here: a channel call that never resolves leaves the
    proposal marked in flight.
    """

    def __init__(self, state, channel=None):
        self.state = state
        self.channel = channel

    def is_applying(self, proposal_id: str) -> bool:
        return proposal_id in self.state.applying_proposal_ids

    async def apply(self, proposal_id: str) -> bool:
        """
        Apply a proposal by id.

        Returns:
            True if the agent accepted the action, False if no channel is
            configured or the request failed

        Raises:
            ProposalNotFoundError: unknown proposal id
            ProposalInFlightError: the proposal is already being applied
        """
        proposal = self.state.get_proposal(proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id)

        if self.is_applying(proposal_id):
            raise ProposalInFlightError(f"Proposal {proposal_id} is already being applied")

        if self.channel is None:
            logger.warning("Agent channel not ready yet. Unable to apply proposal.")
            logger.log_proposal_application(proposal_id, "skipped", {"reason": "no_channel"})
            return False

        self.state.applying_proposal_ids.add(proposal_id)
        try:
            await self.channel.send_custom_action(build_apply_action(proposal))
            entry = build_operator_audit_entry(proposal)
            self.state.apply_batch("audit_log", [entry])
            logger.log_proposal_application(proposal_id, "success", {"action_type": proposal.action_type})
            return True
        except Exception as e:
            logger.error(f"Failed to apply proposal {proposal_id}: {e}")
            logger.log_proposal_application(proposal_id, "failed", {"error": str(e)[:100]})
            return False
        finally:
            self.state.applying_proposal_ids.discard(proposal_id)
