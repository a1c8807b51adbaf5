from csim.address import Geometry

MOST_RECENT = -1


class Line:
    def __init__(self, valid=False, tag=None, recency=0):
        self.valid = valid
        self.tag = tag
        self.recency = recency

    def install(self, tag):
        self.valid = True
        self.tag = tag
        self.recency = MOST_RECENT

    def touch(self):
        self.recency = MOST_RECENT

    def age(self):
        if self.valid:
            self.recency += 1

    def __repr__(self):
        return 'Line(valid={}, tag={}, recency={})'.format(
            self.valid, self.tag, self.recency)


class Set:
    def __init__(self, lines):
        self.lines = tuple(lines)

    def __iter__(self):
        return iter(self.lines)

    def find(self, tag):
        for line in self.lines:
            if line.valid and line.tag == tag:
                return line
        return None

    def valid_tags(self):
        return [line.tag for line in self.lines if line.valid]

    def age_all(self):
        for line in self.lines:
            line.age()


class Cache:
    """2^s sets of E lines, every line invalid until first touched."""

    def __init__(self, geometry: Geometry):
        self.geometry = geometry
        sets = []
        for _ in range(geometry.num_sets):
            sets.append(Set(Line() for _ in range(geometry.E)))
        self.sets = tuple(sets)

    def __getitem__(self, set_index):
        return self.sets[set_index]
