from .network import BeliefNetwork, BeliefNode, CPF
