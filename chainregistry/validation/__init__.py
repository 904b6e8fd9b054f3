"""Address and hash types, standard parameters, roles, prestates and contract versions."""