'''
Stage ladders for indicator display.

A ladder is an ordered list of (threshold, label) pairs from the top stage
down. A value lands in the first stage whose threshold it exceeds; anything
at or below the second-to-last threshold lands in the bottom stage.
'''

from typing import List, Sequence, Tuple

from btc_compass.domain.types import PolicyOutput
from btc_compass.domain.types import Stage

OSCILLATOR_STAGES: List[Tuple[float, str]] = [
    (0.5, '7. Mania (0.5+)'),
    (0.4, '6. Overshoot (0.4 ~ 0.5)'),
    (0.2, '5. Overvalued (0.2 ~ 0.4)'),
    (-0.1, '4. Fair (-0.1 ~ 0.2)'),
    (-0.3, '3. Undervalued (-0.3 ~ -0.1)'),
    (-0.5, '2. Undershoot (-0.5 ~ -0.3)'),
    (float('-inf'), '1. Abyss (-0.5-)'),
]

SENTIMENT_STAGES: List[Tuple[float, str]] = [
    (75, '5. Extreme greed (75 ~ 100)'),
    (55, '4. Greed (55 ~ 74)'),
    (45, '3. Neutral (45 ~ 54)'),
    (25, '2. Fear (25 ~ 44)'),
    (0, '1. Extreme fear (0 ~ 24)'),
]

ON_CHAIN_STAGES: List[Tuple[float, str]] = [
    (7.0, '6. Market top (7.0+)'),
    (5.0, '5. Bubble warning (5.0 ~ 7.0)'),
    (3.0, '4. Heating up (3.0 ~ 5.0)'),
    (1.0, '3. Trend in progress (1.0 ~ 3.0)'),
    (0.1, '2. Bottom forming (0.1 ~ 1.0)'),
    (float('-inf'), '1. Capitulation (0.1-)'),
]


class StageLadder:
  '''
  Classify a value onto a descending ladder of labelled stages.

  Every value (including nan) maps to exactly one stage.
  '''

  def __init__(self, name: str, stages: Sequence[Tuple[float, str]]):
    '''
    Initialize a ladder.

    Args:
      name: Ladder name used in diagnostics
      stages: (threshold, label) pairs, thresholds strictly descending

    Raises:
      ValueError: If fewer than two stages or thresholds are not descending
    '''
    if len(stages) < 2:
      raise ValueError(f'Ladder {name} needs at least two stages')
    thresholds = [t for t, _ in stages]
    if any(a <= b for a, b in zip(thresholds, thresholds[1:])):
      raise ValueError(f'Ladder {name} thresholds must be strictly descending')
    self.name = name
    self.stages = list(stages)

  def compute(self, value: float) -> PolicyOutput[Stage]:
    '''Find the stage for value.'''
    n = len(self.stages)
    for idx, (threshold, label) in enumerate(self.stages):
      if idx == n - 1 or value > threshold:
        stage = Stage(rank=n - idx, label=label, threshold=threshold)
        break

    return PolicyOutput(value=stage,
                        diag={
                            'ladder': self.name,
                            'rank': stage.rank,
                        })


def default_ladders() -> dict[str, StageLadder]:
  '''Ladders for the oscillator, sentiment index and on-chain proxy.'''
  return {
      'oscillator': StageLadder('oscillator', OSCILLATOR_STAGES),
      'sentiment': StageLadder('sentiment', SENTIMENT_STAGES),
      'on_chain': StageLadder('on_chain', ON_CHAIN_STAGES),
  }
