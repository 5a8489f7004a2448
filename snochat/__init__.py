""" SnoChat — credit-gated AI chat backend. """
