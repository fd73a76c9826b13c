"""
Password strength scoring.

Rules:
- at least 8 characters
- at least one uppercase letter
- at least one special character (!@#$%&)
- at least one lowercase letter

Each satisfied rule adds one point. Repeated digits, digit sequences and
years only produce warnings and never change the score.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


MIN_LENGTH = 8
RECOMMENDED_LENGTH = 10
SPECIAL_CHARACTERS = '!@#$%&'

MSG_REQUIRED = 'Senha é obrigatória'
MSG_LENGTH = f'Use pelo menos {MIN_LENGTH} caracteres'
MSG_UPPERCASE = 'Inclua ao menos uma letra maiúscula'
MSG_SPECIAL = f'Inclua ao menos um caractere especial ({SPECIAL_CHARACTERS})'
MSG_LOWERCASE = 'Use letras minúsculas também'

WARN_REPEATED_DIGITS = 'Evite números repetidos (ex: 111, 222)'
WARN_SEQUENCE = 'Evite sequências numéricas (ex: 123456)'
WARN_DATE = 'Evite usar datas (ex: 1990, 2000)'
WARN_SHORT = f'Considere usar {RECOMMENDED_LENGTH}+ caracteres para maior segurança'

UPPERCASE_PATTERN = re.compile(r'[A-Z]')
LOWERCASE_PATTERN = re.compile(r'[a-z]')
SPECIAL_PATTERN = re.compile(f'[{re.escape(SPECIAL_CHARACTERS)}]')
REPEATED_DIGITS_PATTERN = re.compile(r'([0-9])\1{2,}')
YEAR_PATTERN = re.compile(r'19[0-9]{2}|20[0-9]{2}')

_DIGITS = '0123456789'
SEQUENCE_PATTERN = re.compile('|'.join(
    [_DIGITS[i:i + 4] for i in range(len(_DIGITS) - 3)] +
    [_DIGITS[::-1][i:i + 4] for i in range(len(_DIGITS) - 3)]
))


class PasswordStrength(str, Enum):
    WEAK = 'weak'
    FAIR = 'fair'
    GOOD = 'good'
    STRONG = 'strong'

    @property
    def label(self) -> str:
        return STRENGTH_LABELS[self]


STRENGTH_LABELS = {
    PasswordStrength.WEAK: 'Muito Fraca',
    PasswordStrength.FAIR: 'Fraca',
    PasswordStrength.GOOD: 'Boa',
    PasswordStrength.STRONG: 'Forte',
}

STRENGTH_BY_SCORE = {
    0: PasswordStrength.WEAK,
    1: PasswordStrength.WEAK,
    2: PasswordStrength.FAIR,
    3: PasswordStrength.GOOD,
    4: PasswordStrength.STRONG,
}


@dataclass
class PasswordAssessment:
    """Result of scoring a password."""
    score: int
    strength: PasswordStrength
    feedback: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.strength.label

    @property
    def is_acceptable(self) -> bool:
        """True when every mandatory rule passes."""
        return not self.feedback

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'strength': self.strength.value,
            'feedback': list(self.feedback),
            'warnings': list(self.warnings),
        }


def check_password_strength(password: Optional[str]) -> PasswordAssessment:
    """
    Score a password and explain what is missing.

    Args:
        password: Password as typed by the user

    Returns:
        PasswordAssessment with the score (0-4), the strength tier, the
        mandatory fixes in ``feedback`` and advisory ``warnings``
    """
    if not password:
        return PasswordAssessment(
            score=0,
            strength=PasswordStrength.WEAK,
            feedback=[MSG_REQUIRED],
            warnings=[]
        )

    score = 0
    feedback = []
    warnings = []

    scoring_rules = [
        (len(password) >= MIN_LENGTH, MSG_LENGTH),
        (UPPERCASE_PATTERN.search(password) is not None, MSG_UPPERCASE),
        (SPECIAL_PATTERN.search(password) is not None, MSG_SPECIAL),
        (LOWERCASE_PATTERN.search(password) is not None, MSG_LOWERCASE),
    ]

    for passed, message in scoring_rules:
        if passed:
            score += 1
        else:
            feedback.append(message)

    if REPEATED_DIGITS_PATTERN.search(password):
        warnings.append(WARN_REPEATED_DIGITS)

    if SEQUENCE_PATTERN.search(password):
        warnings.append(WARN_SEQUENCE)

    if YEAR_PATTERN.search(password):
        warnings.append(WARN_DATE)

    if len(password) < RECOMMENDED_LENGTH and score >= 3:
        warnings.append(WARN_SHORT)

    return PasswordAssessment(
        score=score,
        strength=STRENGTH_BY_SCORE[min(score, 4)],
        feedback=feedback,
        warnings=warnings
    )
