from .common import GroundAtom, WorldVariables, PossibleWorld, GroundLit, TrueFalse, \
    Conjunction, Disjunction, Negation, Implication, Biimplication, lit
from .kb import WeightedFormula, WeightedClause, WeightedClausalKB
from .sat import DPLL, satisfiable
