"""Registry of definition names

Every schema node that gets one or more definitions is given a
discriminator, a suffix that keeps all its definition names unique
within one document.  The same node always gets the same discriminator,
so a container that is converted once for its config view and once for
its full view ends up with matching names.

Nodes with a single definition, such as identities, can instead be
given a permanent name chosen from a list of candidates.
"""

class DefinitionNames(object):
    def __init__(self, reserved=()):
        self.names = set(reserved)
        """all definition names handed out or reserved"""
        self.discriminators = {}
        """dict of id(node):(node, discriminator)"""
        self.assigned = {}
        """dict of id(node):(node, name)"""

    def add_unlinked_name(self, name):
        """Reserve `name` without binding it to a node."""
        self.names.add(name)

    def is_listed(self, node):
        return id(node) in self.discriminators

    def is_assigned(self, node):
        return id(node) in self.assigned

    def get_discriminator(self, node):
        """Return the discriminator previously picked for `node`."""
        return self.discriminators[id(node)][1]

    def get_name(self, node):
        return self.assigned[id(node)][1]

    def pick_discriminator(self, node, names):
        """Pick a discriminator for `node`.

        `names` lists every name form that will be used for the
        node's definitions.  The discriminator is the empty string if
        none of them is taken, otherwise the lowest number that makes
        all of them free.  All forms are claimed for `node`.

        A node which already has a discriminator keeps it.
        """
        if self.is_listed(node):
            return self.get_discriminator(node)
        discriminator = ""
        counter = 0
        while not self.is_name_clear(names, discriminator):
            counter += 1
            discriminator = str(counter)
        for name in names:
            self.names.add(name + discriminator)
        # keep the node alive so that its id is not reused
        self.discriminators[id(node)] = (node, discriminator)
        return discriminator

    def is_name_clear(self, names, discriminator):
        for name in names:
            if name + discriminator in self.names:
                return False
        return True

    def assign_name(self, node, names):
        """Return the permanent name of `node`.

        The first of `names` which is not claimed becomes the node's
        name.  If all of them are claimed, the lowest number which
        makes the last one free is appended to it.  A node which
        already has a name keeps it.
        """
        if self.is_assigned(node):
            return self.get_name(node)
        for name in names:
            if name not in self.names:
                break
        else:
            counter = 1
            while names[-1] + str(counter) in self.names:
                counter += 1
            name = names[-1] + str(counter)
        self.names.add(name)
        self.assigned[id(node)] = (node, name)
        return name
