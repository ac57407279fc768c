"""Model classes whose views live under view_data/.../zoo/"""


class Animal(object):

    def __init__(self, name):
        self.name = name

    def __str__(self):
        return '%s(%s)' % (self.__class__.__name__, self.name)


class Dog(Animal):
    pass


class Puppy(Dog):
    pass


class Kennel(object):

    def __init__(self, name, dogs):
        self.name = name
        self.dogs = dogs


class Node(object):

    def __init__(self, name, children=()):
        self.name = name
        self.children = list(children)
