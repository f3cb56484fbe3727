from .provider import KinematicsProvider, require_link
from .serial_chain import SerialChainKinematics, create_serial_chain

__all__ = [
    "KinematicsProvider",
    "SerialChainKinematics",
    "create_serial_chain",
    "require_link",
]

# Pinocchio FK/Jacobian (optional dependency)
try:
    from .pinocchio_fk import PinocchioKinematics

    __all__ += ["PinocchioKinematics"]
except ImportError:
    pass
