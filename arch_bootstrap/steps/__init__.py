from .step_20_update_system import UpdateSystemStep
from .step_30_install_official import InstallOfficialStep
from .step_40_ensure_aur_helper import EnsureAurHelperStep
from .step_50_install_aur import InstallAurStep
from .step_60_link_paths import LinkPathsStep
from .step_90_next_steps import NextStepsStep

__all__ = [
    "UpdateSystemStep",
    "InstallOfficialStep",
    "EnsureAurHelperStep",
    "InstallAurStep",
    "LinkPathsStep",
    "NextStepsStep",
]
