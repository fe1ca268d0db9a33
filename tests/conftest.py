import pytest

from novacall.context import CallContext
from novacall.controller import CallController
from novacall.session import CallSession
from novacall.state_machine import StateMachine

from tests.fakes import StepClock, make_ids


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def ids():
    return make_ids()


@pytest.fixture
def context():
    return CallContext(
        purpose="Follow up on job application",
        talking_points=(
            "Thank them for reviewing the application",
            "Offer to schedule a short call next week",
        ),
        handoff_conditions=("Caller requests to speak with Manohar directly",),
        consent_to_summary=True,
        phone_number="+15125551234",
    )


@pytest.fixture
def session(context):
    return CallSession.baseline(len(context.talking_points))


@pytest.fixture
def machine(ids, clock):
    return StateMachine(id_factory=ids, clock=clock)


@pytest.fixture
def controller(context, ids, clock):
    return CallController(context, id_factory=ids, clock=clock)


@pytest.fixture
def live(controller):
    """Controller with a call already started."""
    controller.start_call()
    return controller
