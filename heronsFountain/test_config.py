# -- Configuration Tests -- #

'''
Presets, validation and JSON loading for FountainConfig.

Sean Bowman [02/12/2026]
'''

import json
import logging
from pathlib import Path

import pytest

from heronsFountain.config import ConfigError, FountainConfig
from heronsFountain.logConfig import setupLogging


CONFIG_DIR = Path(__file__).parent / 'configs'


def testCanonicalPresetIsValid():
    config = FountainConfig.canonical()
    assert config.validate() is config
    assert config.initialLevels == {'Top': 0.75, 'Basin': 1.0, 'Reservoir': 0.26}


def testQuickCyclePreset():
    config = FountainConfig.quickCycle().validate()
    assert config.rateConstant == 0.25
    assert config.initialFlowIntensity == 1.0
    assert config.reseedOnReset


@pytest.mark.parametrize('overrides', [
    {'basinLevel': 1.5},
    {'reservoirLevel': -0.1},
    {'rateConstant': 0.0},
    {'flipDuration': float('nan')},
    {'maxTimeStep': float('inf')},
    {'maxParticles': 0},
    {'maxRipples': 0},
    {'flipEmptyLevel': 0.99},
    {'flipFullLevel': 1.0},
])
def testValidateRejectsBadValues(overrides):
    with pytest.raises(ConfigError):
        FountainConfig(**overrides).validate()


def testConfigErrorIsValueError():
    assert issubclass(ConfigError, ValueError)


def testFromJsonFillsMissingSections(tmp_path):
    path = tmp_path / 'partial.json'
    path.write_text(json.dumps({
        'levels': {'reservoir': 0.5},
        'jet': {'seed': 11, 'maxParticles': 120},
    }))

    config = FountainConfig.fromJson(str(path))

    assert config.reservoirLevel == 0.5
    assert config.basinLevel == 1.0
    assert config.rngSeed == 11
    assert config.maxParticles == 120
    assert config.rateConstant == FountainConfig().rateConstant


def testFromJsonValidates(tmp_path):
    path = tmp_path / 'bad.json'
    path.write_text(json.dumps({'cycle': {'fullLevel': 0.01}}))
    with pytest.raises(ConfigError):
        FountainConfig.fromJson(str(path))


def testShippedCanonicalJson():
    config = FountainConfig.fromJson(str(CONFIG_DIR / 'canonical.json'))
    assert config.initialLevels == FountainConfig.canonical().initialLevels
    assert config.initialFlowIntensity == 0.5
    assert config.rngSeed == 7


def testToDictRoundTripsFields():
    data = FountainConfig(rngSeed=3).toDict()
    assert data['rngSeed'] == 3
    assert FountainConfig(**data) == FountainConfig(rngSeed=3)


def testSetupLoggingReplacesHandlers(tmp_path):
    logFile = tmp_path / 'fountain.log'
    logger = setupLogging('debug', str(logFile))
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logger.info('hello')
    for handler in logger.handlers:
        handler.flush()
    assert 'hello' in logFile.read_text()

    logger = setupLogging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def testSetupLoggingFallsBackToInfoForUnknownName():
    logger = setupLogging('chatty')
    assert logger.level == logging.INFO
    assert all(h.level == logging.INFO for h in logger.handlers)
    setupLogging(logging.WARNING)
