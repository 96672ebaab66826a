""" Calculators, orchestrators and data providers of HiDEM. """
