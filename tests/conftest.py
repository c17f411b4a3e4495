# tests/conftest.py
import pytest
from thermal_lab import (FluidProperties, AntoineCoefficients, AcUnitConfig, AirHandlerConfig, RoomConfig,
                         OptionalValue, PID_PRESETS)

WATER_ANTOINE = AntoineCoefficients(A=8.07131, B=1730.63, C=233.426, t_min=1, t_max=100)
ACETONE_ANTOINE = AntoineCoefficients(A=7.02447, B=1161.0, C=224.0, t_min=-13, t_max=55)


@pytest.fixture
def water_props():
    # No diffusion data: evaporation below boiling is disabled
    return FluidProperties(substance_id='water', atmosphere_key='H2O', specific_heat=4.186,
                           latent_heat_vap=2257, latent_heat_fus=334, boiling_point_sea_level=100,
                           melting_point=0, antoine=WATER_ANTOINE, density=1.0, molar_mass=18.015)

@pytest.fixture
def water_no_antoine_props():
    return FluidProperties(substance_id='water', atmosphere_key='H2O', specific_heat=4.186,
                           latent_heat_vap=2257, boiling_point_sea_level=100, molar_mass=18.015)

@pytest.fixture
def acetone_props():
    return FluidProperties(substance_id='acetone', atmosphere_key='C3H6O', specific_heat=2.13,
                           latent_heat_vap=518, latent_heat_fus=98, boiling_point_sea_level=56.05,
                           melting_point=-94.7, antoine=ACETONE_ANTOINE, density=0.784,
                           molar_mass=58.08, diffusion_volume_sum=67.67)

@pytest.fixture
def saltwater_props():
    # 10 % NaCl by mass
    return FluidProperties(substance_id='saltwater-10pct', atmosphere_key='H2O', specific_heat=3.9,
                           latent_heat_vap=2257, boiling_point_sea_level=100, antoine=WATER_ANTOINE,
                           molar_mass=18.015, non_volatile_fraction=0.1, van_hoff_factor=1.9,
                           solute_molar_mass=58.44)

@pytest.fixture
def ac_config():
    return AcUnitConfig(cooling_max_watts=2000, heating_max_watts=2000, pid_gains=PID_PRESETS['balanced'])

@pytest.fixture
def air_handler_config():
    return AirHandlerConfig(filtration_efficiency=OptionalValue.of({'C3H6O': 0.9, 'NH3': 0.95}))

@pytest.fixture
def room_config():
    return RoomConfig(volume=30.0, pressure_mode='sealevel')
