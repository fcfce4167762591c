"""Reading a collector configuration and deriving a liveness probe from it."""