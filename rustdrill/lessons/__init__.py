"""Worked solutions for topics the exercises cover."""