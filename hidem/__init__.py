""" HiDEM: household demand and yield estimation. """
